# src/incident_sync/core/records.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Category:
    remote_id: int
    title: str
    description: str


@dataclass(slots=True)
class Location:
    remote_id: int
    name: str
    latitude: float
    longitude: float


@dataclass(slots=True)
class Incident:
    """
    A reported incident.

    Notes:
    - location is owned by value (copied out of the incident payload).
    - category is only required when the incident is posted.
    - posted marks whether the incident has already been pushed to the remote service.
    """

    remote_id: int
    title: str
    description: str
    location: Location
    category: Category | None = None
    occurred_at: datetime | None = None
    posted: bool = False


Record = Category | Location | Incident
