# src/incident_sync/sync/worker.py

from __future__ import annotations

"""
Synchronization worker.

A bounded FIFO of SyncTasks drained by a single worker:
- pull tasks: GET -> parse payload -> coordinator ingestion callbacks
- push tasks: for each pending incident -> POST -> coordinator status callbacks
- after every task: coordinator.update_current_task_no()

The worker stops once the queue is empty; start another run for more tasks.
Failures inside one pull/post are logged and never end the run.
"""

import logging
import queue
import threading

import httpx

from ..config import Settings
from ..core.ports import SyncCoordinator
from .errors import MalformedURLError, NetworkIOError, PayloadDecodeError, QueueFullError
from .http import create_http_client, fetch_text
from .payload import ingest_records, parse_payload
from .poster import post_incident
from .sync_api import build_request_url, submit_parameters
from .sync_models import Resource, SyncTask, TaskKind

logger = logging.getLogger(__name__)

QUEUE_CAPACITY = 10


class SyncWorker:
    """
    Single-consumer synchronization worker.

    Full-queue policy: enqueue() blocks the producer until space frees up.
    With block=False, or when timeout elapses first, QueueFullError is raised.
    """

    def __init__(
            self,
            coordinator: SyncCoordinator,
            base_url: str,
            *,
            client: httpx.Client | None = None,
            settings: Settings | None = None,
    ) -> None:
        self._coordinator = coordinator
        self._base_url = base_url
        self._settings = settings
        self._client = client
        self._owns_client = client is None
        self._queue: queue.Queue[SyncTask] = queue.Queue(maxsize=QUEUE_CAPACITY)
        self._thread: threading.Thread | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    # ---- Task submission ----

    def enqueue(self, task: SyncTask, *, block: bool = True, timeout: float | None = None) -> None:
        try:
            self._queue.put(task, block=block, timeout=timeout)
        except queue.Full:
            raise QueueFullError(f"sync queue is full ({QUEUE_CAPACITY} pending); task {task.name!r} rejected") from None
        logger.debug("Queued %s task %s (pending=%d)", task.kind.value, task.name, self._queue.qsize())

    def pending_count(self) -> int:
        return self._queue.qsize()

    def dequeue(self, timeout: float | None = None) -> SyncTask:
        """Block until a task is available and remove it from the head of the queue."""
        return self._queue.get(timeout=timeout)

    # ---- Lifecycle ----

    def start(self) -> threading.Thread:
        """Drain the queue on a dedicated background thread."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("sync worker is already running")
        self._thread = threading.Thread(target=self.run, name="incident-sync-worker", daemon=True)
        self._thread.start()
        return self._thread

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout)

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def run(self) -> int:
        """Process tasks in FIFO order until the queue is empty. Returns the number of tasks run."""
        processed = 0
        try:
            while True:
                try:
                    task = self._queue.get_nowait()
                except queue.Empty:
                    break

                try:
                    self.execute(task)
                except Exception:
                    logger.exception("Sync task %s failed", task.name)
                finally:
                    self._queue.task_done()

                try:
                    self._coordinator.update_current_task_no()
                except Exception:
                    logger.exception("update_current_task_no failed after task %s", task.name)
                processed += 1
        finally:
            self.close()

        logger.info("Sync run finished: %d task(s) processed", processed)
        return processed

    # ---- Task execution ----

    def _http(self) -> httpx.Client:
        if self._client is None:
            self._client = create_http_client(self._settings)
        return self._client

    def execute(self, task: SyncTask) -> None:
        logger.info("Running %s task %s", task.kind.value, task.name)
        fragment = task.fragment

        if task.kind is TaskKind.PULL:
            if not task.values:
                self.pull(task, fragment)
            else:
                for value in task.values:
                    self.pull(task, fragment, extra=value)
        elif task.kind is TaskKind.PUSH:
            self.push(task, fragment)

    def pull(self, task: SyncTask, fragment: str, extra: str | None = None) -> int:
        """One GET + parse + ingest. Returns the number of records ingested (0 on any failure)."""
        resource = Resource.from_task_name(task.name)
        if resource is None:
            logger.warning("No payload parser for pull task %s; skipping", task.name)
            return 0

        url = build_request_url(self._base_url, task.name, fragment, extra)
        logger.debug("URL: %s", url)

        try:
            body = fetch_text(self._http(), url)
            logger.debug("Payload: %s", body)
            records = parse_payload(body, resource)
        except MalformedURLError:
            logger.warning("Invalid url %s", url, exc_info=True)
            return 0
        except NetworkIOError:
            logger.warning("Error fetching response data from %s", url, exc_info=True)
            return 0
        except PayloadDecodeError:
            logger.warning("Unexpected payload from %s", url, exc_info=True)
            return 0

        count = ingest_records(self._coordinator, resource, records)
        logger.info("Pulled %d %s", count, resource.value)
        return count

    def push(self, task: SyncTask, fragment: str) -> int:
        """Post every pending incident. Returns how many were accepted."""
        template = submit_parameters(task.name)
        if template is None:
            logger.info("Push task %s has no submission routine; nothing sent", task.name)
            return 0

        url = build_request_url(self._base_url, task.name, fragment)
        pending = list(self._coordinator.get_pending_incidents())
        logger.info("Posting %d pending incident(s) to %s", len(pending), url)

        accepted = 0
        for incident in pending:
            # One broken incident or callback must not stop the rest of the batch.
            try:
                if post_incident(self._http(), url, incident, template, self._coordinator):
                    accepted += 1
            except Exception:
                logger.exception("Posting incident %s failed", getattr(incident, "remote_id", "?"))
        return accepted
