"""Immutable per-run request context for the content API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import httpx

from linkaudit.config import settings
from linkaudit.errors import ConfigurationError


@dataclass(frozen=True)
class RequestContext:
    """Base URL plus optional preview credential, built once per run."""

    project_id: str
    base_url: str
    preview_key: Optional[str] = field(default=None, repr=False)

    @classmethod
    def for_project(
        cls,
        project_id: str,
        preview_key: Optional[str] = None,
    ) -> RequestContext:
        """Select the Delivery or Preview API depending on *preview_key*."""
        project_id = (project_id or "").strip()
        if not project_id:
            raise ConfigurationError("A project ID is required.")

        preview_key = (preview_key or "").strip() or None
        host = settings.delivery_host
        if preview_key:
            host = f"preview-{host}"
        return cls(
            project_id=project_id,
            base_url=f"https://{host}/{project_id}",
            preview_key=preview_key,
        )

    @property
    def headers(self) -> dict[str, str]:
        if self.preview_key:
            return {"Authorization": f"Bearer {self.preview_key}"}
        return {}

    def client(self) -> httpx.Client:
        """Return an ``httpx.Client`` carrying this context's credential."""
        return httpx.Client(
            headers=self.headers,
            timeout=settings.request_timeout,
        )
