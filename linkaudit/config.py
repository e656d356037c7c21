"""Centralised settings for the link auditor.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Upstream content API
    # ------------------------------------------------------------------
    delivery_host: str = field(
        default_factory=lambda: os.environ.get("DELIVERY_HOST", "deliver.kontent.ai")
    )
    app_host: str = field(
        default_factory=lambda: os.environ.get("APP_HOST", "app.kontent.ai")
    )
    page_limit: int = field(
        default_factory=lambda: int(os.environ.get("PAGE_LIMIT", "2000"))
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Validation service (client side)
    # ------------------------------------------------------------------
    validation_service_url: str = field(
        default_factory=lambda: os.environ.get(
            "VALIDATION_SERVICE_URL", "http://localhost:3000/ping"
        )
    )
    chunk_size: int = field(
        default_factory=lambda: int(os.environ.get("CHUNK_SIZE", "50"))
    )

    # ------------------------------------------------------------------
    # Validation service (server side)
    # ------------------------------------------------------------------
    server_host: str = field(
        default_factory=lambda: os.environ.get("SERVER_HOST", "127.0.0.1")
    )
    server_port: int = field(
        default_factory=lambda: int(os.environ.get("SERVER_PORT", "3000"))
    )
    probe_timeout: float = field(
        default_factory=lambda: float(os.environ.get("PROBE_TIMEOUT", "30.0"))
    )
    probe_concurrency: int = field(
        default_factory=lambda: int(os.environ.get("PROBE_CONCURRENCY", "1"))
    )

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )


def configure_logging(level: str | None = None) -> None:
    """Install a root handler for CLI runs.  Safe to call more than once."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=_LOG_FORMAT,
    )


# Module-level singleton; import this everywhere:
#   from linkaudit.config import settings
settings = Settings()
