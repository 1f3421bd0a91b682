"""
HTTP locked-content fetcher tests (httpx.MockTransport).

Tests:
- Valid artifact parses into blocks
- Non-2xx, invalid bodies and transport errors raise LockedContentFetchError
- Malformed addresses fail like any other request
- Default client sends cookies and follows redirects
"""

from __future__ import annotations

import httpx
import pytest

from longread.adapters.http_fetcher import HttpLockedContentFetcher
from longread.adapters.region_view import RegionView
from longread.adapters.timers import ManualTimer
from longread.components.unlock import LockedContentFetchError, UnlockController

ADDRESS = "/content/locked/course/intro.json"
ARTIFACT = {
    "blocks": [
        {"index": 1, "tokenKind": "paragraph", "html": "<p>One</p>\n", "text": "One"},
        {"index": 2, "tokenKind": "component", "html": "<div>Two</div>\n", "text": "Two"},
    ]
}


def make_fetcher(handler) -> HttpLockedContentFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver")
    return HttpLockedContentFetcher(client=client)


class TestFetch:
    @pytest.mark.asyncio
    async def test_success(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json=ARTIFACT)

        blocks = await make_fetcher(handler).fetch(ADDRESS)

        assert seen == [ADDRESS]
        assert [b.index for b in blocks] == [1, 2]
        assert blocks[1].token_kind == "component"
        assert blocks[0].html == "<p>One</p>\n"

    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        fetcher = make_fetcher(lambda request: httpx.Response(404, text="missing"))
        with pytest.raises(LockedContentFetchError) as exc_info:
            await fetcher.fetch(ADDRESS)
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [b"<html>login</html>", b"{}", b'{"blocks": [{"index": "x"}]}'],
    )
    async def test_invalid_body(self, body: bytes) -> None:
        fetcher = make_fetcher(lambda request: httpx.Response(200, content=body))
        with pytest.raises(LockedContentFetchError, match="Invalid locked content"):
            await fetcher.fetch(ADDRESS)

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(LockedContentFetchError, match="failed"):
            await make_fetcher(handler).fetch(ADDRESS)

    @pytest.mark.asyncio
    async def test_malformed_address(self) -> None:
        fetcher = HttpLockedContentFetcher()
        with pytest.raises(LockedContentFetchError, match="failed"):
            await fetcher.fetch("http://[::1")
        await fetcher.aclose()


class TestClient:
    @pytest.mark.asyncio
    async def test_default_client(self) -> None:
        fetcher = HttpLockedContentFetcher(base_url="http://testserver", cookies={"session": "abc"})
        client = fetcher.client
        assert client.follow_redirects
        assert client.cookies.get("session") == "abc"
        assert fetcher.client is client
        await fetcher.aclose()

    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        fetcher = HttpLockedContentFetcher(client=client)
        await fetcher.aclose()
        assert not client.is_closed
        await client.aclose()


class TestWithController:
    @pytest.mark.asyncio
    async def test_malformed_address_reaches_error_phase(self) -> None:
        fetcher = HttpLockedContentFetcher()
        view = RegionView()
        controller = UnlockController("http://[::1", fetcher, view, ManualTimer())

        await controller.unlock()

        assert controller.phase == "error"
        assert view.error_message == "Failed to load full text"
        await fetcher.aclose()
