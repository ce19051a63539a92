# src/incident_sync/core/ports.py

"""
Ports (interfaces) used by the synchronization engine.

The engine never stores records itself; it hands everything to a coordinator.
Any object with these methods can own a sync run (in-memory store, database, UI model).
"""

from __future__ import annotations

from typing import Protocol, Sequence

from .records import Category, Incident, Location


class SyncCoordinator(Protocol):
    """Owner of domain storage and task bookkeeping for a sync run."""

    # Pull ingestion
    def add_category(self, category: Category) -> None: ...
    def add_incident(self, incident: Incident) -> None: ...
    def add_location(self, location: Location) -> None: ...

    # Push bookkeeping
    def get_pending_incidents(self) -> Sequence[Incident]: ...
    def update_posted_incidents(self, incident: Incident) -> None: ...
    def update_failed_incidents(self, incident: Incident) -> None: ...

    # Progress
    def update_current_task_no(self) -> None: ...
