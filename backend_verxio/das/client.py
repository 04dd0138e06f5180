"""
Asset index client: paginated getAssetsByGroup over DAS.

Responsibilities:
- Walk every page of a collection's assets, starting at page 1.
- Stop on the first empty page; enforce a page ceiling so a misbehaving
  indexer cannot keep the loop alive forever.
- Sleep a fixed delay after every page request to stay under rate limits.
- Surface any transport or payload failure as IndexServiceError (no partial results).
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from backend_verxio.config.env import mask_rpc_url
from backend_verxio.config.settings import Settings
from backend_verxio.core.exceptions import IndexServiceError, TooManyPages
from backend_verxio.das.models import AssetRecord
from backend_verxio.das.rpc import DasRpcError, das_call
from backend_verxio.utils.address import require_address
from backend_verxio.verxio_logging import get_logger

logger = get_logger(__name__)

GET_ASSETS_BY_GROUP = "getAssetsByGroup"


class AssetIndexClient:
    """
    Reads all assets of a collection from a DAS indexer.

    Use as an async context manager; an externally owned httpx.AsyncClient
    may be injected (it is then not closed here).
    """

    def __init__(
        self,
        settings: Settings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._rpc_url = settings.rpc_url.rstrip("/")
        self._client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> "AssetIndexClient":
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._settings.request_timeout_sec)
            )
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_all_assets(self, collection_address: str) -> list[AssetRecord]:
        """
        Return every asset of the collection in index order.

        Raises InvalidArgument for a blank/invalid address (before any request),
        TooManyPages when max_pages is exceeded, IndexServiceError otherwise.
        """
        address = require_address(collection_address)
        if self._client is None:
            raise RuntimeError("AssetIndexClient used outside 'async with'")

        assets: list[AssetRecord] = []
        page = 1
        while True:
            if page > self._settings.max_pages:
                logger.error(
                    "das_page_cap_exceeded",
                    collection=address,
                    max_pages=self._settings.max_pages,
                    asset_count=len(assets),
                )
                raise TooManyPages(address, self._settings.max_pages)

            items = await self._fetch_page(address, page)
            await asyncio.sleep(self._settings.page_delay_sec)
            if not items:
                break
            for item in items:
                assets.append(self._to_record(item, address, page))
            logger.debug("das_page_fetched", collection=address, page=page, item_count=len(items))
            page += 1

        logger.info(
            "das_collection_fetched",
            collection=address,
            pages=page - 1,
            requests=page,
            asset_count=len(assets),
        )
        return assets

    async def _fetch_page(self, address: str, page: int) -> list[Any]:
        """One getAssetsByGroup call; empty list when result.items is missing or empty."""
        params = {
            "groupKey": "collection",
            "groupValue": address,
            "page": page,
            "limit": self._settings.page_size,
        }
        try:
            result = await das_call(self._client, self._rpc_url, GET_ASSETS_BY_GROUP, params)
        except (httpx.HTTPError, ValueError, DasRpcError) as e:
            logger.error(
                "das_page_failed",
                collection=address,
                page=page,
                rpc_url=mask_rpc_url(self._rpc_url),
                error=str(e),
            )
            raise IndexServiceError(f"Asset index request failed on page {page}: {e}") from e

        if result is None:
            return []
        if not isinstance(result, dict):
            raise IndexServiceError(f"Asset index returned a malformed result on page {page}")
        items = result.get("items")
        if items is None:
            return []
        if not isinstance(items, list):
            raise IndexServiceError(f"Asset index returned malformed items on page {page}")
        return items

    @staticmethod
    def _to_record(item: Any, address: str, page: int) -> AssetRecord:
        try:
            return AssetRecord.from_rpc_item(item)
        except (KeyError, TypeError) as e:
            logger.error("das_item_malformed", collection=address, page=page, error=str(e))
            raise IndexServiceError(f"Asset index returned a malformed item on page {page}") from e
