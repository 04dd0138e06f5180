"""
Pytest fixtures for backend_verxio tests.

No network: the asset index and pass store are in-memory fakes, and DAS HTTP
traffic goes through httpx.MockTransport.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import httpx
import pytest

from backend_verxio.config.settings import Settings
from backend_verxio.core.exceptions import PassFetchFailure
from backend_verxio.das.models import AssetRecord
from backend_verxio.pass_store.models import PassState, ProgramMeta, RewardTier

# Valid base58 Solana addresses
COLLECTION = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
PASS_ADDRESS = "7F1WzVNQ1Qpurqxxdyv3UrFQR3uoNepULVW9A4bAJ5nZ"

TIERS = (
    RewardTier(name="Bronze", xp_required=0),
    RewardTier(name="Silver", xp_required=100),
    RewardTier(name="Gold", xp_required=500),
)


class FakeAssetIndex:
    """In-memory asset index; counts calls."""

    def __init__(self, assets: list[AssetRecord], error: Exception | None = None) -> None:
        self.assets = list(assets)
        self.error = error
        self.calls: list[str] = []

    async def fetch_all_assets(self, collection_address: str) -> list[AssetRecord]:
        self.calls.append(collection_address)
        if self.error is not None:
            raise self.error
        return list(self.assets)


class FakePassStore:
    """
    In-memory pass store.

    passes maps asset id -> PassState | Exception (raised) | None (not a pass).
    delays maps asset id -> seconds to sleep first, to scramble completion order.
    """

    def __init__(
        self,
        passes: dict[str, PassState | Exception | None],
        program: ProgramMeta | Exception | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.passes = passes
        self.program = program if program is not None else ProgramMeta(name="Test Program", num_minted=0)
        self.delays = delays or {}
        self.pass_calls: list[str] = []
        self.program_calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def get_pass_data(self, asset_id: str) -> PassState | None:
        self.pass_calls.append(asset_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(asset_id, 0))
            value = self.passes.get(asset_id)
            if isinstance(value, Exception):
                raise value
            return value
        finally:
            self.in_flight -= 1

    async def get_program_details(self, collection_address: str) -> ProgramMeta:
        self.program_calls.append(collection_address)
        if isinstance(self.program, Exception):
            raise self.program
        return self.program


def make_pass(
    asset_id: str,
    xp: int,
    *,
    last_action: str | None = None,
    tiers: tuple[RewardTier, ...] = TIERS,
    current_tier: str = "Bronze",
) -> PassState:
    return PassState(
        asset_id=asset_id,
        xp=xp,
        last_action=last_action,
        current_tier=current_tier,
        reward_tiers=tiers,
        name=f"Pass {asset_id}",
    )


def das_handler(routes: Callable[[dict[str, Any]], Any], requests: list[dict[str, Any]]):
    """
    Build a MockTransport handler: routes(body) returns the JSON-RPC result,
    an httpx.Response to send as-is, or raises to simulate transport failure.
    Every decoded request body is appended to requests.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        requests.append(body)
        result = routes(body)
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})

    return handler


@pytest.fixture
def settings() -> Settings:
    """Settings with no inter-page delay and small concurrency."""
    return Settings(
        rpc_url="https://das.test/",
        page_size=1000,
        page_delay_sec=0.0,
        max_pages=50,
        request_timeout_sec=5.0,
        pass_concurrency=4,
    )


@pytest.fixture
def mock_http():
    """Factory: mock_http(routes) -> (httpx.AsyncClient, list of request bodies)."""

    def _make(routes: Callable[[dict[str, Any]], Any]) -> tuple[httpx.AsyncClient, list[dict[str, Any]]]:
        requests: list[dict[str, Any]] = []
        client = httpx.AsyncClient(transport=httpx.MockTransport(das_handler(routes, requests)))
        return client, requests

    return _make


@pytest.fixture
def pass_failure() -> PassFetchFailure:
    return PassFetchFailure("getAsset failed: simulated outage")
