"""
Pass enrichment with per-asset failure tolerance.

A failed lookup (network, not found, malformed data, timeout) is logged and
becomes None; it never aborts the batch.
"""

from __future__ import annotations

import asyncio
from typing import Sequence

from backend_verxio.pass_store.models import PassState
from backend_verxio.pass_store.store import PassStore
from backend_verxio.verxio_logging import get_logger

logger = get_logger(__name__)


class PassEnricher:
    """Fetches pass state per asset through a PassStore, at most max_concurrency at a time."""

    def __init__(self, store: PassStore, max_concurrency: int = 8) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self._store = store
        self._sem = asyncio.Semaphore(max_concurrency)

    async def enrich(self, asset_id: str) -> PassState | None:
        async with self._sem:
            try:
                return await self._store.get_pass_data(asset_id)
            except Exception as e:
                logger.warning(
                    "pass_fetch_failed",
                    asset_id=asset_id,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                return None

    async def enrich_many(self, asset_ids: Sequence[str]) -> list[PassState | None]:
        """Enrich all assets concurrently; results are in input order, not completion order."""
        if not asset_ids:
            return []
        results = await asyncio.gather(*(self.enrich(asset_id) for asset_id in asset_ids))
        missing = sum(1 for r in results if r is None)
        logger.info("passes_enriched", requested=len(asset_ids), missing=missing)
        return list(results)
