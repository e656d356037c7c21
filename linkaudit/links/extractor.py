"""Link extraction: turns content items into :class:`LinkGroup` records."""

from __future__ import annotations

import re
from typing import Iterable, List

from linkaudit.content.models import ContentItem, ContentType
from linkaudit.links.models import ExtractedLink, ExtractionResult, LinkGroup

# Anchor shape recognised in rich text.  The tag is matched case-sensitively,
# only http(s) hrefs count, and the URL is the interior of the first quoted
# value after ``href=``, taken verbatim.
ANCHOR_PATTERN = re.compile(r'<a([^>]+)href="(https?://.+?)"[^>]*>(.+?)</a>')


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _extract_urls(markup: object) -> List[str]:
    """Return the href of every matching anchor in *markup*, in document order."""
    if not isinstance(markup, str):
        return []
    return [m.group(2) for m in ANCHOR_PATTERN.finditer(markup)]


def _links_in_item(item: ContentItem) -> List[ExtractedLink]:
    links: List[ExtractedLink] = []
    for element in item.elements.values():
        if element.is_rich_text:
            links.extend(ExtractedLink(url=url) for url in _extract_urls(element.value))
    return links


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def find_rich_text_types(types: Iterable[ContentType]) -> List[str]:
    """Return codenames of the types with at least one rich-text element."""
    return [t.codename for t in types if t.has_rich_text]


def extract_links(items: Iterable[ContentItem]) -> ExtractionResult:
    """Group the external links of each item's rich-text elements.

    Items without any link are left out.  Malformed or non-matching anchors
    are skipped silently.
    """
    groups: List[LinkGroup] = []
    for item in items:
        links = _links_in_item(item)
        if links:
            groups.append(
                LinkGroup(
                    content_item_id=item.id,
                    content_item_name=item.name,
                    links=links,
                )
            )
    return ExtractionResult(
        groups=groups,
        link_count=sum(len(g.links) for g in groups),
    )
