# src/incident_sync/sync/poster.py

from __future__ import annotations

import json
import logging
from datetime import datetime
from decimal import Decimal
from urllib.parse import quote_plus

import httpx

from ..core.ports import SyncCoordinator
from ..core.records import Incident
from .errors import MalformedURLError, NetworkIOError
from .http import post_form

logger = logging.getLogger(__name__)


def _date_parts(when: datetime | None) -> tuple[str, str, str, str]:
    """(MM/dd/yyyy, HH, mm, am|pm); all empty when the incident has no timestamp."""
    if when is None:
        return "", "", "", ""
    marker = "am" if when.hour < 12 else "pm"
    return when.strftime("%m/%d/%Y"), when.strftime("%H"), when.strftime("%M"), marker


def _decimal(value: float) -> str:
    """Shortest round-tripping decimal text, never in exponent form (1e-05 -> 0.00001)."""
    return format(Decimal(repr(float(value))), "f")


def format_incident_params(template: str, incident: Incident) -> str:
    """
    Fill the submission template for one incident.

    Every value is form-encoded, so titles or names containing '&' or '=' stay intact.
    """
    if incident.category is None:
        raise ValueError(f"incident {incident.remote_id} has no category")

    date, hour, minute, marker = _date_parts(incident.occurred_at)
    values = (
        incident.title,
        incident.description,
        date,
        hour,
        minute,
        marker,
        str(incident.category.remote_id),
        _decimal(incident.location.latitude),
        _decimal(incident.location.longitude),
        incident.location.name,
    )
    return template.format(*(quote_plus(v) for v in values))


def is_post_accepted(body: str) -> bool:
    """
    Interpret a submission response.

    Accepted only for a JSON body whose error.code is the string "0".
    Anything without a '{' is an error page.
    """
    if "{" not in body:
        return False
    try:
        document = json.loads(body)
        code = document["error"]["code"]
    except (ValueError, KeyError, TypeError):
        return False
    return str(code).casefold() == "0"


def post_incident(
        client: httpx.Client,
        url: str,
        incident: Incident,
        template: str,
        coordinator: SyncCoordinator,
) -> bool:
    """
    Submit one incident and report the outcome.

    Exactly one of coordinator.update_posted_incidents / update_failed_incidents
    is called. Transport errors never escape.
    """
    accepted = False
    try:
        params = format_incident_params(template, incident)
    except (ValueError, TypeError, AttributeError):
        logger.warning("Incident %s cannot be posted: incomplete fields", incident.remote_id, exc_info=True)
    else:
        logger.debug("Posting incident %s", params)
        try:
            body = post_form(client, url, params)
        except MalformedURLError:
            logger.warning("Incident %s: invalid post url %s", incident.remote_id, url, exc_info=True)
        except NetworkIOError:
            logger.warning("Incident %s: post to %s failed", incident.remote_id, url, exc_info=True)
        else:
            logger.debug("Response: %s", body)
            accepted = is_post_accepted(body)
            if not accepted:
                logger.info("Incident %s post rejected: %s", incident.remote_id, body[:200])

    if accepted:
        logger.info("Incident %s posted", incident.remote_id)
        coordinator.update_posted_incidents(incident)
    else:
        coordinator.update_failed_incidents(incident)
    return accepted
