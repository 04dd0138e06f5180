"""
Per-call collaborators for the assemblers.

Injected collaborators are used as-is and left open; missing ones are built
for this call only, sharing one HTTP client, and closed on exit.
"""

from __future__ import annotations

from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Protocol, Sequence

import httpx

from backend_verxio.config.settings import Settings
from backend_verxio.das.client import AssetIndexClient
from backend_verxio.das.models import AssetRecord
from backend_verxio.pass_store.store import DasPassStore, PassStore


class AssetIndex(Protocol):
    async def fetch_all_assets(self, collection_address: str) -> Sequence[AssetRecord]: ...


@asynccontextmanager
async def open_collaborators(
    settings: Settings,
    index_client: AssetIndex | None = None,
    pass_store: PassStore | None = None,
) -> AsyncIterator[tuple[AssetIndex, PassStore]]:
    async with AsyncExitStack() as stack:
        if index_client is None or pass_store is None:
            http_client = await stack.enter_async_context(
                httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout_sec))
            )
            if index_client is None:
                index_client = AssetIndexClient(settings, http_client=http_client)
            if pass_store is None:
                pass_store = DasPassStore(settings, http_client=http_client)
        yield index_client, pass_store
