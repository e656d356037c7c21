"""Typed access to the Delivery / Preview API listing endpoints."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import httpx

from linkaudit.config import settings
from linkaudit.content.context import RequestContext
from linkaudit.content.models import ContentItem, ContentType
from linkaudit.content.paginator import fetch_all, get_json
from linkaudit.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Language id used by the content app when no language is selected
DEFAULT_LANGUAGE_ID = "00000000-0000-0000-0000-000000000000"


def get_types(client: httpx.Client, ctx: RequestContext) -> list[ContentType]:
    """Retrieve every content type in the project."""
    endpoint = f"{ctx.base_url}/types?limit={settings.page_limit}&skip=0"
    return [ContentType.from_api(t) for t in fetch_all(client, endpoint, "types")]


def build_items_endpoint(
    ctx: RequestContext,
    type_codenames: Iterable[str],
    language: Optional[str] = None,
) -> str:
    """Return the first-page items URL filtered to *type_codenames*."""
    endpoint = f"{ctx.base_url}/items?system.type[in]={','.join(type_codenames)}"
    if language:
        endpoint += f"&system.language={language}"
    return endpoint + f"&depth=0&limit={settings.page_limit}&skip=0"


def get_items(
    client: httpx.Client,
    ctx: RequestContext,
    type_codenames: Iterable[str],
    language: Optional[str] = None,
) -> list[ContentItem]:
    """Retrieve every content item of the given types (and language, if any)."""
    endpoint = build_items_endpoint(ctx, type_codenames, language)
    return [ContentItem.from_api(i) for i in fetch_all(client, endpoint, "items")]


def get_language_id(client: httpx.Client, ctx: RequestContext, codename: str) -> str:
    """Return the system id of the language *codename*.

    Doubles as validation of the codename.

    Raises:
        ConfigurationError: If no language has that codename.
        UpstreamFetchError: If the API request fails.
    """
    endpoint = f"{ctx.base_url}/languages?system.codename={codename}"
    languages = get_json(client, endpoint).get("languages") or []
    if not languages:
        logger.warning("Unknown language codename %r", codename)
        raise ConfigurationError("Language Codename appears to be invalid.")
    return languages[0]["system"]["id"]
