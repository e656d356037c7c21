"""Exception hierarchy for the audit pipeline.

Structural failures abort a run and are raised as one of the classes below.
A link that fails to respond is *not* an error here: it is recorded on the
link itself (see :class:`linkaudit.links.models.ProbeResult`).
"""

from __future__ import annotations

from typing import Optional


class LinkAuditError(Exception):
    """Base class for every error surfaced to the user by an audit run."""


class ConfigurationError(LinkAuditError):
    """Missing or invalid project identifier or language codename."""


class UpstreamFetchError(LinkAuditError):
    """The content API answered with a non-2xx status (or not at all)."""

    def __init__(self, status_code: Optional[int], endpoint: str) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        if status_code is None:
            detail = "no response"
        else:
            detail = f"status {status_code}"
        super().__init__(f"API request failed ({detail}): {endpoint}")


class PaginationCycleError(LinkAuditError):
    """The content API returned a cursor pointing at a page already fetched."""

    def __init__(self, endpoint: str) -> None:
        self.endpoint = endpoint
        super().__init__(f"Pagination revisited an already-fetched page: {endpoint}")


class NoEligibleContentError(LinkAuditError):
    """No content type in the project has a rich-text element."""

    def __init__(self) -> None:
        super().__init__("No Content Types with Rich Text Elements found.")


class NoLinksFoundError(LinkAuditError):
    """Rich-text content exists but none of it links to an external URL."""

    def __init__(self) -> None:
        super().__init__("No external URLs found")


class ValidationTransportError(LinkAuditError):
    """A chunk could not be submitted to, or streamed back from, the service."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)
