"""
Application settings.

Typed, validated view of the environment: RPC URL, DAS pagination knobs,
timeouts and enrichment concurrency. Build with get_settings(); tests build
Settings directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from backend_verxio.config.env import env_float, env_int, get_solana_rpc_url, load_verxio_env
from backend_verxio.core.exceptions import InvalidArgument

DEFAULT_PAGE_SIZE = 1000
DEFAULT_PAGE_DELAY_SEC = 0.1
DEFAULT_MAX_PAGES = 1000
DEFAULT_REQUEST_TIMEOUT_SEC = 30.0
DEFAULT_PASS_CONCURRENCY = 8


@dataclass(frozen=True)
class Settings:
    """Configuration for the index client, pass store and assemblers."""

    rpc_url: str
    page_size: int = DEFAULT_PAGE_SIZE
    page_delay_sec: float = DEFAULT_PAGE_DELAY_SEC
    max_pages: int = DEFAULT_MAX_PAGES
    request_timeout_sec: float = DEFAULT_REQUEST_TIMEOUT_SEC
    pass_concurrency: int = DEFAULT_PASS_CONCURRENCY

    def __post_init__(self) -> None:
        if not self.rpc_url.strip():
            raise InvalidArgument("rpc_url must be non-empty")
        if not (1 <= self.page_size <= 1000):
            raise InvalidArgument("page_size must be between 1 and 1000")
        if self.page_delay_sec < 0:
            raise InvalidArgument("page_delay_sec must be >= 0")
        if self.max_pages < 1:
            raise InvalidArgument("max_pages must be >= 1")
        if self.request_timeout_sec <= 0:
            raise InvalidArgument("request_timeout_sec must be positive")
        if self.pass_concurrency < 1:
            raise InvalidArgument("pass_concurrency must be >= 1")


def get_settings() -> Settings:
    """
    Return settings resolved from the environment (.env loaded first).

    Env: SOLANA_RPC_URL / HELIUS_API_KEY / SOLANA_NETWORK, DAS_PAGE_SIZE,
    DAS_PAGE_DELAY_SEC, DAS_MAX_PAGES, RPC_TIMEOUT_SEC, PASS_FETCH_CONCURRENCY.
    """
    load_verxio_env()
    return Settings(
        rpc_url=get_solana_rpc_url(),
        page_size=env_int("DAS_PAGE_SIZE", DEFAULT_PAGE_SIZE),
        page_delay_sec=env_float("DAS_PAGE_DELAY_SEC", DEFAULT_PAGE_DELAY_SEC),
        max_pages=env_int("DAS_MAX_PAGES", DEFAULT_MAX_PAGES),
        request_timeout_sec=env_float("RPC_TIMEOUT_SEC", DEFAULT_REQUEST_TIMEOUT_SEC),
        pass_concurrency=env_int("PASS_FETCH_CONCURRENCY", DEFAULT_PASS_CONCURRENCY),
    )
