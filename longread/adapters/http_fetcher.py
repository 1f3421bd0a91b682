"""
HTTP locked-content fetcher.

One GET to the artifact address, sending the page's cookies (same-origin
credentials). Every failure surfaces as LockedContentFetchError.
"""

from __future__ import annotations

import logging

import httpx

from longread.components.blocks import Block
from longread.components.locked_store import parse_artifact
from longread.components.unlock import LockedContentFetchError

logger = logging.getLogger(__name__)


class HttpLockedContentFetcher:
    """LockedContentFetcherPort over httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str = "",
        cookies: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url
        self._cookies = cookies or {}
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy initialization of httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                cookies=self._cookies,
                follow_redirects=True,
            )
        return self._client

    async def fetch(self, address: str) -> list[Block]:
        try:
            response = await self.client.get(address)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise LockedContentFetchError(f"Request to {address} failed: {e}") from e

        if not response.is_success:
            raise LockedContentFetchError(
                f"Unexpected status {response.status_code} from {address}",
                status_code=response.status_code,
            )

        try:
            blocks = parse_artifact(response.content)
        except ValueError as e:
            raise LockedContentFetchError(f"Invalid locked content from {address}") from e

        logger.debug("Fetched %d locked blocks from %s", len(blocks), address)
        return blocks

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
