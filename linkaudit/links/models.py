"""Data models for extracted links and their validation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

# ResponseTime placeholders written by the validator when no timing exists
NOT_CALCULATED = "Not Calculated"
INTERNAL_ERROR_TIME = "None - Unexpected Internal Error"
INTERNAL_ERROR_STATUS = 500

Elapsed = Union[int, str]


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single probe against one URL."""

    status: int
    elapsed_ms: Elapsed
    redirected: bool = False
    errored: bool = False


@dataclass
class ExtractedLink:
    """One URL found in rich text, plus its validation result once known."""

    url: str
    status: Optional[int] = None
    elapsed_ms: Optional[Elapsed] = None
    redirected: bool = False
    errored: bool = False

    @property
    def checked(self) -> bool:
        return self.status is not None

    @property
    def outcome(self) -> str:
        """``"redirected"``, ``"errored"`` or ``"ok"``, in that precedence.

        A link whose response carried a 4xx or 5xx status counts as errored
        even though the probe itself succeeded.
        """
        if self.redirected:
            return "redirected"
        if self.errored or (self.status is not None and self.status >= 400):
            return "errored"
        return "ok"

    def record(self, result: ProbeResult) -> None:
        """Store *result* on this link.  A link is recorded exactly once."""
        if self.checked:
            raise RuntimeError(f"Link {self.url!r} has already been validated")
        self.status = result.status
        self.elapsed_ms = result.elapsed_ms
        self.redirected = result.redirected
        self.errored = result.errored

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {
            "URL": self.url,
            "Response": "" if self.status is None else self.status,
            "ResponseTime": "" if self.elapsed_ms is None else self.elapsed_ms,
        }
        if self.checked:
            wire["Redirected"] = self.redirected
            wire["Error"] = self.errored
        return wire

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> ExtractedLink:
        status = data.get("Response")
        elapsed = data.get("ResponseTime")
        return cls(
            url=data["URL"],
            status=None if status in ("", None) else int(status),
            elapsed_ms=None if elapsed in ("", None) else elapsed,
            redirected=bool(data.get("Redirected", False)),
            errored=bool(data.get("Error", False)),
        )


@dataclass
class LinkGroup:
    """All links found in a single content item."""

    content_item_id: str
    content_item_name: str
    links: List[ExtractedLink] = field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {
            "Name": self.content_item_name,
            "systemID": self.content_item_id,
            "URLs": [link.to_wire() for link in self.links],
        }

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> LinkGroup:
        return cls(
            content_item_id=data.get("systemID", ""),
            content_item_name=data.get("Name", ""),
            links=[ExtractedLink.from_wire(u) for u in data.get("URLs", [])],
        )


@dataclass(frozen=True)
class ExtractionResult:
    """Groups found by the extractor together with their total link count."""

    groups: List[LinkGroup]
    link_count: int
