"""Tests for content retrieval — request context, pagination and API client.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made.  Routes match on host + path only, since the items endpoint
  carries a ``system.type[in]`` filter in its query string.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from linkaudit.content.client import (
    build_items_endpoint,
    get_items,
    get_language_id,
    get_types,
)
from linkaudit.content.context import RequestContext
from linkaudit.content.models import ContentItem, ContentType
from linkaudit.content.paginator import fetch_all
from linkaudit.errors import (
    ConfigurationError,
    PaginationCycleError,
    UpstreamFetchError,
)


BASE = "https://deliver.kontent.ai/proj"


def _page(key: str, records: list[dict], next_page: str = "") -> httpx.Response:
    return httpx.Response(200, json={key: records, "pagination": {"next_page": next_page}})


def _type(codename: str, *kinds: str) -> dict:
    return {
        "system": {"id": f"id-{codename}", "codename": codename},
        "elements": {f"el{i}": {"type": kind} for i, kind in enumerate(kinds)},
    }


@pytest.fixture()
def ctx() -> RequestContext:
    return RequestContext.for_project("proj")


@pytest.fixture()
def client():
    with httpx.Client() as c:
        yield c


# ---------------------------------------------------------------------------
# RequestContext
# ---------------------------------------------------------------------------

class TestRequestContext:
    def test_delivery_api_without_key(self) -> None:
        ctx = RequestContext.for_project("proj")
        assert ctx.base_url == BASE
        assert ctx.headers == {}

    def test_preview_api_with_key(self) -> None:
        ctx = RequestContext.for_project("proj", preview_key="secret")
        assert ctx.base_url == "https://preview-deliver.kontent.ai/proj"
        assert ctx.headers == {"Authorization": "Bearer secret"}

    def test_blank_key_is_ignored(self) -> None:
        ctx = RequestContext.for_project("proj", preview_key="   ")
        assert ctx.preview_key is None
        assert ctx.base_url == BASE

    def test_missing_project_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            RequestContext.for_project("  ")

    def test_context_is_immutable(self) -> None:
        ctx = RequestContext.for_project("proj")
        with pytest.raises(Exception):
            ctx.base_url = "https://elsewhere"  # type: ignore[misc]

    def test_key_not_in_repr(self) -> None:
        assert "secret" not in repr(RequestContext.for_project("proj", "secret"))


# ---------------------------------------------------------------------------
# fetch_all
# ---------------------------------------------------------------------------

class TestFetchAll:
    def test_concatenates_three_pages_in_order(self, client) -> None:
        with respx.mock:
            route = respx.get(host="deliver.kontent.ai", path="/proj/types").mock(
                side_effect=[
                    _page("types", [{"n": 1}, {"n": 2}], f"{BASE}/types?skip=2"),
                    _page("types", [{"n": 3}], f"{BASE}/types?skip=3"),
                    _page("types", [{"n": 4}], ""),
                ]
            )
            records = fetch_all(client, f"{BASE}/types?skip=0", "types")

        assert [r["n"] for r in records] == [1, 2, 3, 4]
        assert route.call_count == 3

    def test_follows_the_returned_cursor(self, client) -> None:
        with respx.mock:
            route = respx.get(host="deliver.kontent.ai", path="/proj/types").mock(
                side_effect=[
                    _page("types", [], f"{BASE}/types?skip=2000"),
                    _page("types", [], ""),
                ]
            )
            fetch_all(client, f"{BASE}/types?skip=0", "types")

        assert route.calls[1].request.url.params["skip"] == "2000"

    def test_relative_cursor_resolved_against_current_page(self, client) -> None:
        with respx.mock:
            route = respx.get(host="deliver.kontent.ai", path="/proj/items").mock(
                side_effect=[
                    _page("items", [{"n": 1}], "items?skip=1"),
                    _page("items", [{"n": 2}], ""),
                ]
            )
            records = fetch_all(client, f"{BASE}/items?skip=0", "items")

        assert len(records) == 2
        assert str(route.calls[1].request.url) == f"{BASE}/items?skip=1"

    def test_non_2xx_raises_with_status_and_endpoint(self, client) -> None:
        with respx.mock:
            respx.get(host="deliver.kontent.ai", path="/proj/types").mock(
                side_effect=[
                    _page("types", [{"n": 1}], f"{BASE}/types?skip=1"),
                    httpx.Response(403),
                ]
            )
            with pytest.raises(UpstreamFetchError) as info:
                fetch_all(client, f"{BASE}/types?skip=0", "types")

        assert info.value.status_code == 403
        assert info.value.endpoint == f"{BASE}/types?skip=1"

    def test_transport_failure_raises_without_status(self, client) -> None:
        with respx.mock:
            respx.get(host="deliver.kontent.ai").mock(side_effect=httpx.ConnectError("down"))
            with pytest.raises(UpstreamFetchError) as info:
                fetch_all(client, f"{BASE}/types", "types")

        assert info.value.status_code is None

    def test_repeating_cursor_raises_instead_of_looping(self, client) -> None:
        with respx.mock:
            respx.get(host="deliver.kontent.ai", path="/proj/types").mock(
                side_effect=[
                    _page("types", [], f"{BASE}/types?skip=1"),
                    _page("types", [], f"{BASE}/types?skip=0"),
                ]
            )
            with pytest.raises(PaginationCycleError):
                fetch_all(client, f"{BASE}/types?skip=0", "types")


# ---------------------------------------------------------------------------
# Client helpers
# ---------------------------------------------------------------------------

class TestBuildItemsEndpoint:
    def test_without_language(self, ctx) -> None:
        url = build_items_endpoint(ctx, ["article", "page"])
        assert url == (
            f"{BASE}/items?system.type[in]=article,page&depth=0&limit=2000&skip=0"
        )

    def test_with_language(self, ctx) -> None:
        url = build_items_endpoint(ctx, ["article"], "de-DE")
        assert "&system.language=de-DE&" in url


class TestGetTypesAndItems:
    def test_get_types_parses_models(self, client, ctx) -> None:
        with respx.mock:
            respx.get(host="deliver.kontent.ai", path="/proj/types").mock(
                return_value=_page("types", [_type("article", "text", "rich_text")])
            )
            types = get_types(client, ctx)

        assert len(types) == 1
        assert isinstance(types[0], ContentType)
        assert types[0].codename == "article"
        assert types[0].has_rich_text is True
        assert list(types[0].elements) == ["el0", "el1"]

    def test_get_items_parses_models(self, client, ctx) -> None:
        item = {
            "system": {"id": "i1", "name": "Home", "codename": "home"},
            "elements": {"body": {"type": "rich_text", "value": "<p>x</p>"}},
        }
        with respx.mock:
            route = respx.get(host="deliver.kontent.ai", path="/proj/items").mock(
                return_value=_page("items", [item])
            )
            items = get_items(client, ctx, ["article"])

        assert items == [ContentItem.from_api(item)]
        assert items[0].elements["body"].value == "<p>x</p>"
        assert route.calls[0].request.url.params["depth"] == "0"


class TestGetLanguageId:
    def test_returns_system_id(self, client, ctx) -> None:
        with respx.mock:
            respx.get(host="deliver.kontent.ai", path="/proj/languages").mock(
                return_value=httpx.Response(200, json={"languages": [{"system": {"id": "lang-1"}}]})
            )
            assert get_language_id(client, ctx, "en-US") == "lang-1"

    def test_unknown_codename_raises_configuration_error(self, client, ctx) -> None:
        with respx.mock:
            respx.get(host="deliver.kontent.ai", path="/proj/languages").mock(
                return_value=httpx.Response(200, json={"languages": []})
            )
            with pytest.raises(ConfigurationError, match="invalid"):
                get_language_id(client, ctx, "xx")

    def test_preview_key_sent_as_bearer(self) -> None:
        ctx = RequestContext.for_project("proj", "secret")
        with respx.mock:
            route = respx.get(host="preview-deliver.kontent.ai").mock(
                return_value=httpx.Response(200, json={"languages": [{"system": {"id": "l"}}]})
            )
            with ctx.client() as client:
                get_language_id(client, ctx, "en-US")

        assert route.calls[0].request.headers["Authorization"] == "Bearer secret"
