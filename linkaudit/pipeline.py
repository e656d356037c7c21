"""End-to-end audit run: content API → extraction → streamed validation.

Steps
-----
1. Build the request context (Delivery or Preview API) and, when a language
   codename is given, resolve its id to validate it.
2. Fetch every content type and keep the ones with rich-text elements.
3. Fetch every item of those types and extract its external links.
4. Send the link groups to the validation service in chunks and hand each
   validated group to ``on_group`` as soon as it streams back.

Each step that finds nothing to do ends the run with a dedicated error
(:class:`NoEligibleContentError`, :class:`NoLinksFoundError`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from linkaudit.config import settings
from linkaudit.content.client import (
    DEFAULT_LANGUAGE_ID,
    get_items,
    get_language_id,
    get_types,
)
from linkaudit.content.context import RequestContext
from linkaudit.errors import NoEligibleContentError, NoLinksFoundError
from linkaudit.links.extractor import extract_links, find_rich_text_types
from linkaudit.links.models import LinkGroup
from linkaudit.links.scheduler import chunk
from linkaudit.links.transfer import stream_results

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditOptions:
    project_id: str
    language: Optional[str] = None
    preview_key: Optional[str] = field(default=None, repr=False)
    service_url: Optional[str] = None
    chunk_size: Optional[int] = None


@dataclass
class AuditReport:
    """Everything an audit run produced."""

    content_link_base: str
    link_count: int = 0
    groups: List[LinkGroup] = field(default_factory=list)

    def content_url(self, group: LinkGroup) -> str:
        """Deep link to *group*'s content item in the content app."""
        return f"{self.content_link_base}{group.content_item_id}"


def run_audit(
    options: AuditOptions,
    on_group: Optional[Callable[[LinkGroup, str], None]] = None,
    on_found: Optional[Callable[[int], None]] = None,
) -> AuditReport:
    """Run one audit and return its report.

    *on_found* receives the number of links about to be validated;
    *on_group* receives each validated group as it arrives, with the deep
    link to its content item.

    Raises:
        ConfigurationError: Bad project id or language codename.
        UpstreamFetchError: The content API failed.
        NoEligibleContentError: No content type has a rich-text element.
        NoLinksFoundError: Rich-text content contains no external links.
        ValidationTransportError: The validation service failed.
    """
    ctx = RequestContext.for_project(options.project_id, options.preview_key)

    with ctx.client() as client:
        language_id = DEFAULT_LANGUAGE_ID
        if options.language:
            language_id = get_language_id(client, ctx, options.language)

        report = AuditReport(
            content_link_base=(
                f"https://{settings.app_host}/{ctx.project_id}"
                f"/content-inventory/{language_id}/content/"
            )
        )

        types = get_types(client, ctx)
        codenames = find_rich_text_types(types)
        logger.info("%d of %d content type(s) have rich text", len(codenames), len(types))
        if not codenames:
            raise NoEligibleContentError()

        items = get_items(client, ctx, codenames, options.language)

    extraction = extract_links(items)
    logger.info(
        "Found %d link(s) in %d of %d item(s)",
        extraction.link_count,
        len(extraction.groups),
        len(items),
    )
    if not extraction.groups:
        raise NoLinksFoundError()

    report.link_count = extraction.link_count
    if on_found is not None:
        on_found(extraction.link_count)

    chunks = chunk(extraction.groups, options.chunk_size or settings.chunk_size)
    for group in stream_results(chunks, options.service_url):
        report.groups.append(group)
        if on_group is not None:
            on_group(group, report.content_url(group))

    return report
