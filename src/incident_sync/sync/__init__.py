"""
Synchronization subsystem.

Components:
- sync_models.py: data structures (SyncTask, TaskKind, Resource)
- sync_api.py: remote API constants, URL building and task builders
- errors.py: exception hierarchy for transport/decode failures
- http.py: httpx client factory + GET/POST helpers
- payload.py: JSON pull payload -> domain records
- poster.py: incident submission and response interpretation
- worker.py: bounded task queue + single-thread worker draining it
- coordinator.py: in-memory coordinator used by the CLI
"""
