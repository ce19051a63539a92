# src/incident_sync/sync/sync_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class TaskKind(StrEnum):
    PULL = "pull"
    PUSH = "push"


class Resource(StrEnum):
    """
    Pullable remote resources.

    The value is the task name, which is also the key of the item array inside
    the response payload. item_key is the key wrapping each single record.
    """

    CATEGORIES = "categories"
    INCIDENTS = "incidents"
    LOCATIONS = "locations"

    @property
    def item_key(self) -> str:
        return _ITEM_KEYS[self]

    @classmethod
    def from_task_name(cls, name: str | None) -> Resource | None:
        if not name:
            return None
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


_ITEM_KEYS: dict[Resource, str] = {
    Resource.CATEGORIES: "category",
    Resource.INCIDENTS: "incident",
    Resource.LOCATIONS: "location",
}


@dataclass(slots=True, frozen=True)
class SyncTask:
    """
    One unit of synchronization work.

    - name: remote task name (categories, incidents, report, ...)
    - request_fragment: appended to the name to build the request path
    - values: empty -> single pull; otherwise one pull per value, each value
      appended to the URL for that call only
    """

    name: str
    kind: TaskKind
    request_fragment: str | None = None
    values: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(str(v) for v in self.values))

    @property
    def fragment(self) -> str:
        """Cumulative request fragment: task name plus the optional request fragment."""
        return self.name + (self.request_fragment or "")
