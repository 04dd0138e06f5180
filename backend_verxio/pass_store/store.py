"""
Pass store: loyalty pass and program state read through DAS getAsset.

Responsibilities:
- get_pass_data(asset_id): pass state for one asset, None when the asset is
  not a loyalty pass (or unknown to the indexer).
- get_program_details(collection): program name, minted count, tiers.
- Map every transport or payload failure to PassFetchFailure.
"""

from __future__ import annotations

import asyncio
from typing import Any, Protocol

import httpx

from backend_verxio.config.settings import Settings
from backend_verxio.core.exceptions import PassFetchFailure, ProgramNotFound
from backend_verxio.das.rpc import DasRpcError, das_call
from backend_verxio.pass_store.models import PassState, ProgramMeta
from backend_verxio.pass_store.parser import (
    MalformedPassData,
    collection_of,
    parse_pass_state,
    parse_program_meta,
)
from backend_verxio.verxio_logging import get_logger

logger = get_logger(__name__)

GET_ASSET = "getAsset"


class PassStore(Protocol):
    """What the enricher and assemblers need from a pass store."""

    async def get_pass_data(self, asset_id: str) -> PassState | None: ...

    async def get_program_details(self, collection_address: str) -> ProgramMeta: ...


class DasPassStore:
    """
    PassStore backed by a DAS-capable RPC.

    Program details, and failures to read them, are memoised for the lifetime
    of the instance so a batch of passes from one collection costs one
    collection lookup. Create one store per aggregation call.
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
        self._programs: dict[str, ProgramMeta] = {}
        self._program_failures: dict[str, PassFetchFailure] = {}
        self._program_lock = asyncio.Lock()

    async def __aenter__(self) -> "DasPassStore":
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

    async def _get_asset(self, asset_id: str) -> Any:
        if self._client is None:
            raise RuntimeError("DasPassStore used outside 'async with'")
        try:
            return await das_call(self._client, self._rpc_url, GET_ASSET, {"id": asset_id})
        except (httpx.HTTPError, ValueError, DasRpcError) as e:
            raise PassFetchFailure(f"getAsset failed for {asset_id}: {e}") from e

    async def get_pass_data(self, asset_id: str) -> PassState | None:
        """
        Pass state for asset_id, or None when the asset is not a pass.

        Reward tiers are read from the pass's collection through
        get_program_details(), whose ProgramNotFound or PassFetchFailure
        propagates.
        """
        asset = await self._get_asset(asset_id)
        if asset is None:
            return None
        collection = collection_of(asset) if isinstance(asset, dict) else None
        tiers = ()
        if collection:
            program = await self.get_program_details(collection)
            tiers = program.tiers
        try:
            return parse_pass_state(asset, tiers)
        except MalformedPassData as e:
            raise PassFetchFailure(f"Malformed pass data for {asset_id}: {e}") from e

    async def get_program_details(self, collection_address: str) -> ProgramMeta:
        """
        Program details for a collection, looked up at most once per store.

        A failed lookup is remembered too: later callers get the same
        PassFetchFailure (or ProgramNotFound) without another request.
        """
        async with self._program_lock:
            cached = self._programs.get(collection_address)
            if cached is not None:
                return cached
            failure = self._program_failures.get(collection_address)
            if failure is not None:
                raise failure
            try:
                program = await self._load_program(collection_address)
            except PassFetchFailure as e:
                self._program_failures[collection_address] = e
                logger.warning(
                    "program_details_failed",
                    collection=collection_address,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise
            self._programs[collection_address] = program
            logger.debug(
                "program_details_loaded",
                collection=collection_address,
                name=program.name,
                tier_count=len(program.tiers),
            )
            return program

    async def _load_program(self, collection_address: str) -> ProgramMeta:
        asset = await self._get_asset(collection_address)
        if asset is None:
            raise ProgramNotFound(f"Loyalty program not found: {collection_address}")
        try:
            return parse_program_meta(asset, collection_address)
        except MalformedPassData as e:
            raise PassFetchFailure(f"Malformed program data for {collection_address}: {e}") from e
