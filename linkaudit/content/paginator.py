"""Cursor-following retrieval of listing endpoints."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from linkaudit.errors import PaginationCycleError, UpstreamFetchError

logger = logging.getLogger(__name__)


def fetch_all(client: httpx.Client, endpoint: str, key: str) -> list[dict[str, Any]]:
    """Return every record under *key* across all pages starting at *endpoint*.

    Follows ``pagination.next_page`` until it is the empty string.  Relative
    cursors are resolved against the page that returned them.

    All-or-nothing: if any page fails, nothing accumulated so far is returned.

    Raises:
        UpstreamFetchError: On a non-2xx response or a transport failure.
        PaginationCycleError: If a cursor points back at a page already fetched.
    """
    records: list[dict[str, Any]] = []
    seen: set[str] = set()
    current = endpoint

    while True:
        seen.add(current)
        payload = get_json(client, current)
        page = payload.get(key) or []
        records.extend(page)
        logger.debug("Fetched %d %s from %s", len(page), key, current)

        cursor = (payload.get("pagination") or {}).get("next_page") or ""
        if cursor == "":
            break

        current = str(httpx.URL(current).join(cursor))
        if current in seen:
            raise PaginationCycleError(current)

    return records


def get_json(client: httpx.Client, endpoint: str) -> dict[str, Any]:
    """GET *endpoint* and return its JSON body, raising on any non-2xx."""
    try:
        response = client.get(endpoint)
    except httpx.HTTPError as exc:
        logger.error("Request to %s failed: %s", endpoint, exc)
        raise UpstreamFetchError(None, endpoint) from exc

    if not response.is_success:
        logger.error("Request to %s returned %d", endpoint, response.status_code)
        raise UpstreamFetchError(response.status_code, endpoint)
    return response.json()
