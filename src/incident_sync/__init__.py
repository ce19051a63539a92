"""
incident-sync: synchronization engine for a remote mapping-incident service.

Components:
- core/records.py: domain records (Category, Location, Incident)
- core/ports.py: coordinator port consumed by the engine
- sync/: task model, HTTP transport, payload parser, incident poster, worker
- cli/main.py: command line entrypoint
"""
