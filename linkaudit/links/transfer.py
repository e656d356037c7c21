"""Client side of the chunked validation protocol.

Each chunk is POSTed as a JSON array to the validation service, which
answers with one JSON object per line as soon as each group has been
checked.  Lines are parsed and yielded the moment they are complete; the
next chunk is only sent once the current response stream has ended.
"""

from __future__ import annotations

import json
import logging
from typing import Iterable, Iterator, List, Optional

import httpx

from linkaudit.config import settings
from linkaudit.errors import ValidationTransportError
from linkaudit.links.models import LinkGroup
from linkaudit.links.reassembler import LineReassembler

logger = logging.getLogger(__name__)


def _parse(line: str) -> LinkGroup:
    try:
        return LinkGroup.from_wire(json.loads(line))
    except (ValueError, KeyError, TypeError) as exc:
        raise ValidationTransportError(
            f"Malformed result line from validation service: {line[:200]!r}"
        ) from exc


def _stream_chunk(
    client: httpx.Client,
    service_url: str,
    chunk: List[LinkGroup],
) -> Iterator[LinkGroup]:
    body = [group.to_wire() for group in chunk]
    with client.stream("POST", service_url, json=body) as response:
        if not response.is_success:
            raise ValidationTransportError(
                "Unexpected error occurred communicating with server. "
                f"Status code: {response.status_code}",
                status_code=response.status_code,
            )

        buffer = LineReassembler()
        for data in response.iter_bytes():
            for line in buffer.feed(data):
                yield _parse(line)
        tail = buffer.close()
        if tail is not None:
            yield _parse(tail)


def stream_results(
    chunks: Iterable[List[LinkGroup]],
    service_url: Optional[str] = None,
    client: Optional[httpx.Client] = None,
) -> Iterator[LinkGroup]:
    """Submit *chunks* one at a time and yield validated groups as they arrive.

    Raises:
        ValidationTransportError: If the service rejects a chunk or the
            connection fails; remaining chunks are not sent.
    """
    url = service_url or settings.validation_service_url
    owns_client = client is None
    if client is None:
        # Results trickle in per group, so only the connect phase is bounded.
        client = httpx.Client(
            timeout=httpx.Timeout(settings.request_timeout, read=None)
        )

    try:
        for index, chunk in enumerate(chunks):
            logger.debug("Submitting chunk %d (%d groups) to %s", index, len(chunk), url)
            try:
                yield from _stream_chunk(client, url, chunk)
            except httpx.HTTPError as exc:
                logger.error("Chunk %d failed: %s", index, exc)
                raise ValidationTransportError(
                    f"Error occurred communicating with server: {exc}"
                ) from exc
    finally:
        if owns_client:
            client.close()
