# src/incident_sync/sync/payload.py

"""
Pull payload decoding.

Wire shape:
    {"payload": {"<task name>": [{"<item key>": {...fields...}}, ...]}}

The whole body is decoded before anything is ingested, so a malformed item
means no records at all for that call.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable

from ..core.ports import SyncCoordinator
from ..core.records import Category, Incident, Location, Record
from .errors import DateDecodeError, PayloadDecodeError
from .sync_api import INCIDENT_DATE_FORMAT, PAYLOAD
from .sync_models import Resource

logger = logging.getLogger(__name__)


def _object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"{what} is not a JSON object")
    return value


def _int(item: dict[str, Any], key: str) -> int:
    value = item[key]
    if isinstance(value, bool) or value is None:
        raise TypeError(f"{key!r} is not an integer")
    return int(value)


def _float(item: dict[str, Any], key: str) -> float:
    value = item[key]
    if isinstance(value, bool) or value is None:
        raise TypeError(f"{key!r} is not a number")
    return float(value)


def _str(item: dict[str, Any], key: str) -> str:
    value = item[key]
    if not isinstance(value, str):
        raise TypeError(f"{key!r} is not a string")
    return value


def parse_incident_date(raw: Any) -> datetime:
    if not isinstance(raw, str):
        raise DateDecodeError(f"incident date is not a string: {raw!r}")
    try:
        return datetime.strptime(raw, INCIDENT_DATE_FORMAT)
    except ValueError as exc:
        raise DateDecodeError(f"unparseable incident date {raw!r}") from exc


def build_category(item: dict[str, Any]) -> Category:
    return Category(
        remote_id=_int(item, "id"),
        title=_str(item, "title"),
        description=_str(item, "description"),
    )


def build_location(item: dict[str, Any]) -> Location:
    return Location(
        remote_id=_int(item, "id"),
        name=_str(item, "name"),
        latitude=_float(item, "latitude"),
        longitude=_float(item, "longitude"),
    )


def build_incident(item: dict[str, Any]) -> Incident:
    incident = Incident(
        remote_id=_int(item, "incidentid"),
        title=_str(item, "incidenttitle"),
        description=_str(item, "incidentdescription"),
        location=Location(
            remote_id=_int(item, "locationid"),
            name=_str(item, "locationname"),
            latitude=_float(item, "locationlatitude"),
            longitude=_float(item, "locationlongitude"),
        ),
        posted=False,
    )

    # A bad or null date keeps the incident, just without a timestamp.
    raw_date = item["incidentdate"]
    try:
        incident.occurred_at = parse_incident_date(raw_date)
    except DateDecodeError:
        logger.warning("Incident %s: could not parse date %r", incident.remote_id, raw_date, exc_info=True)
    return incident


_BUILDERS: dict[Resource, Callable[[dict[str, Any]], Record]] = {
    Resource.CATEGORIES: build_category,
    Resource.INCIDENTS: build_incident,
    Resource.LOCATIONS: build_location,
}


def parse_payload(body: str, resource: Resource) -> list[Record]:
    """
    Decode a pull response body into records of the resource's type.

    Raises PayloadDecodeError on invalid JSON or any unexpected shape.
    """
    try:
        document = json.loads(body)
    except ValueError as exc:
        raise PayloadDecodeError(f"{resource.value}: response is not valid JSON") from exc

    try:
        data = _object(_object(document, "response")[PAYLOAD], PAYLOAD)
        items = data[resource.value]
    except (KeyError, TypeError) as exc:
        raise PayloadDecodeError(f"{resource.value}: missing {PAYLOAD}.{resource.value}") from exc

    if not isinstance(items, list):
        raise PayloadDecodeError(f"{resource.value}: {PAYLOAD}.{resource.value} is not an array")

    build = _BUILDERS[resource]
    records: list[Record] = []
    for index, element in enumerate(items):
        try:
            item = _object(_object(element, "item")[resource.item_key], resource.item_key)
            records.append(build(item))
        except (KeyError, TypeError, ValueError) as exc:
            raise PayloadDecodeError(f"{resource.value}[{index}]: {exc}") from exc
    return records


def ingest_records(coordinator: SyncCoordinator, resource: Resource, records: list[Record]) -> int:
    """Forward each record to the coordinator callback for its type. Returns the count forwarded."""
    if resource is Resource.CATEGORIES:
        ingest = coordinator.add_category
    elif resource is Resource.INCIDENTS:
        ingest = coordinator.add_incident
    elif resource is Resource.LOCATIONS:
        ingest = coordinator.add_location
    else:
        raise ValueError(f"unknown resource: {resource!r}")

    for record in records:
        ingest(record)  # type: ignore[arg-type]
    return len(records)
