"""Content package — retrieval of types and items from the content API."""

from linkaudit.content.client import get_items, get_language_id, get_types
from linkaudit.content.context import RequestContext
from linkaudit.content.models import ContentItem, ContentType, Element
from linkaudit.content.paginator import fetch_all

__all__ = [
    "fetch_all",
    "get_types",
    "get_items",
    "get_language_id",
    "RequestContext",
    "ContentType",
    "ContentItem",
    "Element",
]
