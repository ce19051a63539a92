# src/incident_sync/sync/sync_api.py

"""
Remote API vocabulary.

Pull requests go to  {base}/{REQUEST_URL_PREFIX}{task name}{fragment}[{value}]
Incident posts go to {base}/ with a form body built from SUBMIT_INCIDENT_TEMPLATE.
"""

from __future__ import annotations

from collections.abc import Iterable

from .sync_models import Resource, SyncTask, TaskKind

REQUEST_URL_PREFIX = "api?task="
PAYLOAD = "payload"

CATEGORIES = Resource.CATEGORIES.value
INCIDENTS = Resource.INCIDENTS.value
LOCATIONS = Resource.LOCATIONS.value
POST_INCIDENT = "report"
TAG_NEWS = "tagnews"

INCIDENT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Positional order: title, description, date (MM/dd/yyyy), hour (HH), minute (mm),
# am/pm, category id, latitude, longitude, location name.
SUBMIT_INCIDENT_TEMPLATE = (
    "task=report"
    "&incident_title={0}"
    "&incident_description={1}"
    "&incident_date={2}"
    "&incident_hour={3}"
    "&incident_minute={4}"
    "&incident_ampm={5}"
    "&incident_category={6}"
    "&latitude={7}"
    "&longitude={8}"
    "&location_name={9}"
    "&resp=json"
)

_SUBMIT_TEMPLATES: dict[str, str] = {
    POST_INCIDENT: SUBMIT_INCIDENT_TEMPLATE,
}


def normalize_task_name(task_name: str) -> str:
    """Task names are matched case-insensitively (Report == report)."""
    return task_name.strip().lower()


def is_post_incident(task_name: str) -> bool:
    return normalize_task_name(task_name) == POST_INCIDENT


def submit_parameters(task_name: str) -> str | None:
    """Form template for a push task, or None when the task has no submission routine."""
    return _SUBMIT_TEMPLATES.get(normalize_task_name(task_name))


def build_request_url(base_url: str, task_name: str, fragment: str, extra: str | None = None) -> str:
    """
    Build the request URL for one HTTP call.

    The post-incident task submits to the service root, so it gets no prefix/fragment.
    """
    slash = "" if base_url.endswith("/") else "/"
    if is_post_incident(task_name):
        return base_url + slash
    return f"{base_url}{slash}{REQUEST_URL_PREFIX}{fragment}{extra or ''}"


def pull_task(name: str, request_fragment: str | None = None, values: Iterable[object] = ()) -> SyncTask:
    return SyncTask(name=name, kind=TaskKind.PULL, request_fragment=request_fragment, values=tuple(values))


def push_task(name: str, request_fragment: str | None = None) -> SyncTask:
    return SyncTask(name=name, kind=TaskKind.PUSH, request_fragment=request_fragment)


def default_pull_tasks() -> list[SyncTask]:
    """Full pull round: categories, locations, then every incident."""
    return [
        pull_task(CATEGORIES),
        pull_task(LOCATIONS),
        pull_task(INCIDENTS, "&by=all"),
    ]


def incidents_by_category_task(category_ids: Iterable[int]) -> SyncTask | None:
    """Fan-out pull: one incidents request per category id. None when there are no ids."""
    values = [str(int(c)) for c in category_ids]
    if not values:
        return None
    return pull_task(INCIDENTS, "&by=catid&id=", values=values)


def post_incidents_task() -> SyncTask:
    return push_task(POST_INCIDENT)
