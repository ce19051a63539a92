# tests/test_payload.py

from __future__ import annotations

import json
from datetime import datetime

import pytest

from incident_sync.core.records import Category, Incident, Location
from incident_sync.sync.errors import DateDecodeError, PayloadDecodeError
from incident_sync.sync.payload import ingest_records, parse_incident_date, parse_payload
from incident_sync.sync.sync_models import Resource


def _incident_item(**overrides) -> dict:
    item = {
        "incidentid": "12",
        "incidenttitle": "Fire",
        "incidentdescription": "Market fire",
        "incidentdate": "2024-03-01 13:45:00",
        "locationid": "4",
        "locationname": "Gikomba",
        "locationlatitude": "-1.2833",
        "locationlongitude": "36.8333",
    }
    item.update(overrides)
    return item


def _incidents_body(*items: dict) -> str:
    return json.dumps({"payload": {"incidents": [{"incident": i} for i in items]}})


def test_categories_payload_yields_category_and_ingests_once(coordinator) -> None:
    body = '{"payload":{"categories":[{"category":{"id":5,"title":"Fire","description":"d"}}]}}'

    records = parse_payload(body, Resource.CATEGORIES)
    assert records == [Category(remote_id=5, title="Fire", description="d")]

    assert ingest_records(coordinator, Resource.CATEGORIES, records) == 1
    assert coordinator.named("add_category") == [Category(remote_id=5, title="Fire", description="d")]
    assert coordinator.named("add_incident") == []


def test_incident_payload_decodes_nested_location_and_date() -> None:
    (incident,) = parse_payload(_incidents_body(_incident_item()), Resource.INCIDENTS)

    assert isinstance(incident, Incident)
    assert incident.remote_id == 12
    assert incident.title == "Fire"
    assert incident.location == Location(remote_id=4, name="Gikomba", latitude=-1.2833, longitude=36.8333)
    assert incident.occurred_at == datetime(2024, 3, 1, 13, 45, 0)
    assert incident.posted is False
    assert incident.category is None


def test_incident_with_bad_date_is_kept_without_timestamp(coordinator) -> None:
    records = parse_payload(_incidents_body(_incident_item(incidentdate="yesterday")), Resource.INCIDENTS)
    ingest_records(coordinator, Resource.INCIDENTS, records)

    (incident,) = coordinator.named("add_incident")
    assert incident.occurred_at is None
    assert incident.title == "Fire"


def test_location_payload() -> None:
    body = json.dumps(
        {"payload": {"locations": [{"location": {"id": 3, "name": "Kisumu", "latitude": -0.1, "longitude": 34.75}}]}}
    )
    assert parse_payload(body, Resource.LOCATIONS) == [
        Location(remote_id=3, name="Kisumu", latitude=-0.1, longitude=34.75)
    ]


def test_empty_item_array_yields_nothing() -> None:
    assert parse_payload('{"payload":{"categories":[]}}', Resource.CATEGORIES) == []


@pytest.mark.parametrize(
    "body",
    [
        "not json",
        "[]",
        '{"error":{"code":"007"}}',
        '{"payload":{"locations":[]}}',
        '{"payload":{"categories":{}}}',
        '{"payload":{"categories":[{"incident":{"id":1}}]}}',
        '{"payload":{"categories":[{"category":{"id":1,"title":"x"}}]}}',
        '{"payload":{"categories":[{"category":{"id":"abc","title":"x","description":"y"}}]}}',
    ],
)
def test_malformed_payload_raises(body: str) -> None:
    with pytest.raises(PayloadDecodeError):
        parse_payload(body, Resource.CATEGORIES)


def test_one_bad_item_aborts_whole_payload() -> None:
    good = _incident_item()
    bad = _incident_item()
    del bad["locationname"]
    with pytest.raises(PayloadDecodeError):
        parse_payload(_incidents_body(good, bad), Resource.INCIDENTS)


def test_parse_incident_date_errors_are_typed() -> None:
    assert parse_incident_date("2023-12-31 23:59:59") == datetime(2023, 12, 31, 23, 59, 59)
    with pytest.raises(DateDecodeError):
        parse_incident_date("31/12/2023")


@pytest.mark.parametrize("raw_date", [None, 20240301, ""])
def test_null_or_non_string_date_keeps_every_incident(coordinator, raw_date) -> None:
    body = _incidents_body(_incident_item(), _incident_item(incidentid="13", incidentdate=raw_date))

    records = parse_payload(body, Resource.INCIDENTS)
    ingest_records(coordinator, Resource.INCIDENTS, records)

    first, second = coordinator.named("add_incident")
    assert first.occurred_at == datetime(2024, 3, 1, 13, 45, 0)
    assert second.remote_id == 13
    assert second.occurred_at is None


def test_missing_date_key_is_still_a_shape_error() -> None:
    item = _incident_item()
    del item["incidentdate"]
    with pytest.raises(PayloadDecodeError):
        parse_payload(_incidents_body(item), Resource.INCIDENTS)
