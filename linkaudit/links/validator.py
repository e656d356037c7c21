"""Link probing: one GET per URL, timed and classified.

Classification
--------------
- A response arrived (any status code)  → its status, the elapsed time in
  milliseconds, ``redirected`` when the final URL differs from the requested
  one, ``errored=False``.
- The status line arrived but the body read then failed or timed out →
  that status, ``"Not Calculated"``, ``errored=True``.
- Nothing usable arrived (DNS, refused connection, early timeout, bad URL) →
  ``500``, ``"None - Unexpected Internal Error"``, ``errored=True``.

Probe failures are returned as data; :func:`probe` never raises for them
and never retries.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

import httpx

from linkaudit.config import settings
from linkaudit.links.models import (
    INTERNAL_ERROR_STATUS,
    INTERNAL_ERROR_TIME,
    NOT_CALCULATED,
    LinkGroup,
    ProbeResult,
)

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; LinkAudit-Bot/1.0)"
}


def make_client() -> httpx.AsyncClient:
    """Return the ``httpx.AsyncClient`` used for probing (redirects followed)."""
    return httpx.AsyncClient(
        headers=_DEFAULT_HEADERS,
        timeout=settings.probe_timeout,
        follow_redirects=True,
    )


def _is_redirected(requested: str, final: httpx.URL) -> bool:
    try:
        return final != httpx.URL(requested)
    except httpx.InvalidURL:
        return True


def _failed(url: str, status: Optional[int], exc: BaseException) -> ProbeResult:
    if status is not None:
        logger.info("Probe of %s failed after status %d: %r", url, status, exc)
        return ProbeResult(status, NOT_CALCULATED, redirected=False, errored=True)
    logger.info("Probe of %s failed: %r", url, exc)
    return ProbeResult(
        INTERNAL_ERROR_STATUS, INTERNAL_ERROR_TIME, redirected=False, errored=True
    )


async def _get(
    client: httpx.AsyncClient,
    url: str,
    attempt: dict[str, int],
) -> ProbeResult:
    """GET *url*, storing the status in *attempt* as soon as it is known."""
    start = time.perf_counter()
    try:
        async with client.stream("GET", url) as response:
            attempt["status"] = response.status_code
            await response.aread()
            elapsed_ms = round((time.perf_counter() - start) * 1000)
            return ProbeResult(
                status=response.status_code,
                elapsed_ms=elapsed_ms,
                redirected=_is_redirected(url, response.url),
                errored=False,
            )
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return _failed(url, attempt.get("status"), exc)


async def probe(
    client: httpx.AsyncClient,
    url: str,
    timeout: Optional[float] = None,
) -> ProbeResult:
    """Probe *url* once and classify the outcome.

    *timeout* bounds the whole attempt (connect, redirects and body); it
    defaults to ``settings.probe_timeout``.  A timeout after the status line
    arrived keeps that status.
    """
    limit = settings.probe_timeout if timeout is None else timeout
    attempt: dict[str, int] = {}
    try:
        return await asyncio.wait_for(_get(client, url, attempt), timeout=limit)
    except asyncio.TimeoutError as exc:
        logger.info("Probe of %s timed out after %.1fs", url, limit)
        return _failed(url, attempt.get("status"), exc)


async def validate_group(
    client: httpx.AsyncClient,
    group: LinkGroup,
    semaphore: Optional[asyncio.Semaphore] = None,
) -> LinkGroup:
    """Probe every link of *group* and record the results on it.

    Without a *semaphore* links are probed one after another.  With one,
    they are probed concurrently, each probe holding a semaphore slot.
    Returns the same group once every link has a result.
    """
    if semaphore is None:
        for link in group.links:
            link.record(await probe(client, link.url))
        return group

    async def _bounded(url: str) -> ProbeResult:
        async with semaphore:
            return await probe(client, url)

    results = await asyncio.gather(*(_bounded(link.url) for link in group.links))
    for link, result in zip(group.links, results):
        link.record(result)
    return group
