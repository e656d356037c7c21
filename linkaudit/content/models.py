"""Data models for records returned by the content API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

RICH_TEXT = "rich_text"


@dataclass(frozen=True)
class Element:
    """A single element of a type (descriptor) or of an item (value)."""

    type: str
    value: Any = None

    @property
    def is_rich_text(self) -> bool:
        return self.type == RICH_TEXT


def _elements(raw: dict[str, Any] | None) -> dict[str, Element]:
    # dicts keep insertion order, so element order matches the API payload
    return {
        name: Element(type=data.get("type", ""), value=data.get("value"))
        for name, data in (raw or {}).items()
    }


@dataclass(frozen=True)
class ContentType:
    id: str
    codename: str
    elements: dict[str, Element] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> ContentType:
        system = data.get("system", {})
        return cls(
            id=system.get("id", ""),
            codename=system.get("codename", ""),
            elements=_elements(data.get("elements")),
        )

    @property
    def has_rich_text(self) -> bool:
        return any(el.is_rich_text for el in self.elements.values())


@dataclass(frozen=True)
class ContentItem:
    id: str
    name: str
    codename: str
    elements: dict[str, Element] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> ContentItem:
        system = data.get("system", {})
        return cls(
            id=system.get("id", ""),
            name=system.get("name", ""),
            codename=system.get("codename", ""),
            elements=_elements(data.get("elements")),
        )
