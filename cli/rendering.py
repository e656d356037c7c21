"""Utilities for rendering audit results in the CLI."""

from __future__ import annotations

from typing import List, Optional

import typer

from linkaudit.links.models import ExtractedLink, LinkGroup

HEADINGS = ["Content Item Name", "URL Found", "Response", "Response Time", "Content Item Link"]

_COLOURS = {
    "ok": typer.colors.GREEN,
    "redirected": typer.colors.YELLOW,
    "errored": typer.colors.RED,
}


def _cell(value: object) -> str:
    return "" if value is None else str(value)


def link_row(group: LinkGroup, link: ExtractedLink, content_url: Optional[str] = None) -> str:
    """Return one tab-separated row for *link*, coloured by its outcome."""
    row = "\t".join(
        [
            group.content_item_name,
            link.url,
            _cell(link.status),
            _cell(link.elapsed_ms),
            _cell(content_url),
        ]
    )
    return typer.style(row, fg=_COLOURS[link.outcome])


def render_group(group: LinkGroup, content_url: Optional[str] = None) -> List[str]:
    return [link_row(group, link, content_url) for link in group.links]


def render_heading() -> str:
    return typer.style("\t".join(HEADINGS), bold=True)
