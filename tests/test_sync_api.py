# tests/test_sync_api.py

from __future__ import annotations

import pytest

from incident_sync.sync.sync_api import (
    POST_INCIDENT,
    TAG_NEWS,
    build_request_url,
    incidents_by_category_task,
    normalize_task_name,
    pull_task,
    submit_parameters,
)
from incident_sync.sync.sync_models import Resource, SyncTask, TaskKind


@pytest.mark.parametrize("base", ["http://service.local", "http://service.local/"])
def test_pull_url_inserts_single_slash(base: str) -> None:
    url = build_request_url(base, "incidents", "incidents&by=all")
    assert url == "http://service.local/api?task=incidents&by=all"


def test_pull_url_appends_extra_parameter() -> None:
    url = build_request_url("http://service.local", "incidents", "incidents&by=catid&id=", "4")
    assert url == "http://service.local/api?task=incidents&by=catid&id=4"


def test_post_incident_url_is_service_root() -> None:
    assert build_request_url("http://service.local", POST_INCIDENT, "report&x=1") == "http://service.local/"
    assert build_request_url("http://service.local/", POST_INCIDENT, "report") == "http://service.local/"


def test_task_fragment_and_values_are_frozen() -> None:
    task = pull_task("incidents", "&by=catid&id=", values=[1, 2])
    assert task.kind is TaskKind.PULL
    assert task.fragment == "incidents&by=catid&id="
    assert task.values == ("1", "2")
    with pytest.raises(AttributeError):
        task.name = "categories"  # type: ignore[misc]


def test_task_without_fragment_uses_name() -> None:
    assert SyncTask(name="categories", kind=TaskKind.PULL).fragment == "categories"


def test_incidents_by_category_fans_out_one_value_per_category() -> None:
    task = incidents_by_category_task([7, 2])
    assert task is not None
    assert task.name == "incidents"
    assert task.values == ("7", "2")


def test_resource_lookup_is_closed() -> None:
    assert Resource.from_task_name("Categories") is Resource.CATEGORIES
    assert Resource.INCIDENTS.item_key == "incident"
    assert Resource.from_task_name("report") is None
    assert Resource.from_task_name(None) is None


def test_only_post_incident_has_a_submit_template() -> None:
    assert submit_parameters(POST_INCIDENT) is not None
    assert submit_parameters(TAG_NEWS) is None


def test_incidents_by_category_without_ids_builds_no_task() -> None:
    assert incidents_by_category_task([]) is None


def test_post_incident_name_matches_case_insensitively() -> None:
    assert build_request_url("http://service.local", "Report", "Report") == "http://service.local/"
    assert submit_parameters(" REPORT ") is not None
    assert normalize_task_name(" Report ") == POST_INCIDENT
