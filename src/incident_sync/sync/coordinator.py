# src/incident_sync/sync/coordinator.py

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from ..core.records import Category, Incident, Location
from .errors import QueueFullError
from .sync_models import SyncTask
from .worker import SyncWorker

logger = logging.getLogger(__name__)


class InMemoryCoordinator:
    """
    Dict-backed coordinator.

    Pulled records are keyed by remote id (a re-pull replaces the previous copy).
    Local incidents waiting for submission live in `pending` until posted.
    """

    def __init__(self, pending: Iterable[Incident] = ()) -> None:
        self._lock = threading.Lock()
        self.categories: dict[int, Category] = {}
        self.locations: dict[int, Location] = {}
        self.incidents: dict[int, Incident] = {}
        self.pending: list[Incident] = list(pending)
        self.posted: list[Incident] = []
        self.failed: list[Incident] = []
        self.completed_tasks = 0
        self.total_tasks = 0

    # ---- Ingestion ----

    def add_category(self, category: Category) -> None:
        with self._lock:
            self.categories[category.remote_id] = category

    def add_location(self, location: Location) -> None:
        with self._lock:
            self.locations[location.remote_id] = location

    def add_incident(self, incident: Incident) -> None:
        with self._lock:
            self.incidents[incident.remote_id] = incident

    # ---- Submission ----

    def queue_incident(self, incident: Incident) -> None:
        with self._lock:
            incident.posted = False
            self.pending.append(incident)

    def get_pending_incidents(self) -> list[Incident]:
        with self._lock:
            return [i for i in self.pending if not i.posted]

    def update_posted_incidents(self, incident: Incident) -> None:
        with self._lock:
            incident.posted = True
            self.pending = [i for i in self.pending if i is not incident]
            self.failed = [i for i in self.failed if i is not incident]
            self.posted.append(incident)

    def update_failed_incidents(self, incident: Incident) -> None:
        with self._lock:
            if not any(i is incident for i in self.failed):
                self.failed.append(incident)

    # ---- Progress ----

    def update_current_task_no(self) -> None:
        with self._lock:
            self.completed_tasks += 1
            done, total = self.completed_tasks, self.total_tasks
        logger.debug("Sync progress: %d/%d", done, total)

    def progress(self) -> tuple[int, int]:
        with self._lock:
            return self.completed_tasks, self.total_tasks

    def synchronize(self, worker: SyncWorker, tasks: Iterable[SyncTask]) -> int:
        """
        Run tasks to completion on the calling thread.

        Tasks are queued without blocking; whenever the queue fills up the
        worker drains it before queueing continues. Returns tasks processed.
        """
        processed = 0
        for task in tasks:
            with self._lock:
                self.total_tasks += 1
            try:
                worker.enqueue(task, block=False)
            except QueueFullError:
                processed += worker.run()
                worker.enqueue(task, block=False)
        processed += worker.run()
        return processed
