"""Link validation endpoint with newline-delimited JSON streaming.

Routes
------
POST /ping    Body: JSON array of link groups (see below)

Each group of the request is validated in submission order.  As soon as
every link of a group has been probed, the group is written back as one
line of JSON, so the client can render results while later groups are
still being checked.

Wire format
-----------
Request body::

    [{"Name": "...", "systemID": "...",
      "URLs": [{"URL": "https://...", "Response": "", "ResponseTime": ""}]}]

Response body (``application/json``, chunked), one line per group::

    {"Name": "...", "systemID": "...", "URLs": [{"URL": "https://...",
     "Response": 200, "ResponseTime": 87, "Redirected": false, "Error": false}]}

A ``Trailer: Content-MD5`` header is declared for compatibility with
existing clients; no trailer value is sent.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, AsyncIterator, List

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from linkaudit.config import settings
from linkaudit.links.models import ExtractedLink, LinkGroup
from linkaudit.links.validator import make_client, validate_group

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class LinkIn(BaseModel):
    URL: str
    # Echoed by clients as empty strings; ignored, results are always fresh.
    Response: Any = ""
    ResponseTime: Any = ""


class LinkGroupIn(BaseModel):
    Name: str = ""
    systemID: str = ""
    URLs: List[LinkIn] = []

    def to_group(self) -> LinkGroup:
        return LinkGroup(
            content_item_id=self.systemID,
            content_item_name=self.Name,
            links=[ExtractedLink(url=link.URL) for link in self.URLs],
        )


# ---------------------------------------------------------------------------
# NDJSON helpers
# ---------------------------------------------------------------------------

def _line(group: LinkGroup) -> str:
    """Format a validated group as a single NDJSON line."""
    return json.dumps(group.to_wire()) + "\n"


# ---------------------------------------------------------------------------
# Async generators
# ---------------------------------------------------------------------------

async def _sequential(
    client: httpx.AsyncClient,
    groups: List[LinkGroup],
    request: Request,
) -> AsyncIterator[str]:
    for group in groups:
        if await request.is_disconnected():
            logger.info("Client disconnected; skipping remaining groups")
            return
        await validate_group(client, group)
        yield _line(group)


async def _concurrent(
    client: httpx.AsyncClient,
    groups: List[LinkGroup],
    request: Request,
    workers: int,
) -> AsyncIterator[str]:
    """Probe up to *workers* links at once, still emitting groups in order.

    Groups that finish early stay in their task until every group before
    them has been written.
    """
    semaphore = asyncio.Semaphore(workers)
    tasks = [
        asyncio.create_task(validate_group(client, group, semaphore))
        for group in groups
    ]
    try:
        for task in tasks:
            if await request.is_disconnected():
                logger.info("Client disconnected; cancelling outstanding probes")
                return
            yield _line(await task)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


async def _validation_stream(
    groups: List[LinkGroup],
    request: Request,
) -> AsyncIterator[str]:
    """Yield one NDJSON line per group, in request order."""
    workers = settings.probe_concurrency
    client = make_client()
    if workers > 1:
        lines = _concurrent(client, groups, request, workers)
    else:
        lines = _sequential(client, groups, request)
    try:
        async for line in lines:
            logger.debug("Sending result line: %s", line.rstrip())
            yield line
    finally:
        # stops outstanding probes when the client goes away mid-stream
        await lines.aclose()
        await client.aclose()


# ---------------------------------------------------------------------------
# Route
# ---------------------------------------------------------------------------

@router.post("/ping")
async def ping(body: List[LinkGroupIn], request: Request) -> StreamingResponse:
    """Validate every link of the submitted groups and stream the results."""
    groups = [group.to_group() for group in body]
    logger.info(
        "Received %d group(s) with %d link(s)",
        len(groups),
        sum(len(g.links) for g in groups),
    )
    return StreamingResponse(
        _validation_stream(groups, request),
        media_type="application/json",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",   # disable nginx proxy buffering
            "Trailer": "Content-MD5",
        },
    )
