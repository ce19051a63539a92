# src/incident_sync/sync/http.py

from __future__ import annotations

import logging

import httpx

from ..config import Settings, get_settings
from .errors import MalformedURLError, NetworkIOError

logger = logging.getLogger(__name__)

_FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


def build_timeout(settings: Settings) -> httpx.Timeout:
    total_s = max(0.1, settings.http_timeout_s)
    connect_s = max(0.1, settings.http_connect_timeout_s)
    return httpx.Timeout(total_s, connect=min(connect_s, total_s))


def create_http_client(settings: Settings | None = None) -> httpx.Client:
    """
    Create the client used by one worker.

    No automatic retries: a failed call is reported once and the worker moves on.
    """
    if settings is None:
        settings = get_settings()
    return httpx.Client(
        timeout=build_timeout(settings),
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )


def _send(client: httpx.Client, method: str, url: str, *, content: bytes | None = None) -> httpx.Response:
    try:
        response = client.request(
            method,
            url,
            content=content,
            headers=_FORM_HEADERS if content is not None else None,
        )
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
        raise MalformedURLError(f"invalid url {url!r}: {exc}") from exc
    except httpx.HTTPError as exc:
        raise NetworkIOError(f"{method} {url} failed: {exc.__class__.__name__}") from exc

    if not response.is_success:
        raise NetworkIOError(f"HTTP status {response.status_code} for {method} {url}", status_code=response.status_code)
    return response


def fetch_text(client: httpx.Client, url: str) -> str:
    """GET url and return the full response body as text."""
    return _send(client, "GET", url).text


def post_form(client: httpx.Client, url: str, body: str) -> str:
    """POST an already URL-encoded form body and return the response body as text."""
    return _send(client, "POST", url, content=body.encode("utf-8")).text
