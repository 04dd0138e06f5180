"""
Tests for environment-driven settings.
"""

from __future__ import annotations

import pytest

from backend_verxio.config.env import get_solana_rpc_url, mask_rpc_url
from backend_verxio.config.settings import Settings, get_settings
from backend_verxio.core.exceptions import InvalidArgument

ENV_KEYS = (
    "SOLANA_RPC_URL",
    "HELIUS_API_KEY",
    "SOLANA_NETWORK",
    "SOLANA_CLUSTER",
    "DAS_PAGE_SIZE",
    "DAS_PAGE_DELAY_SEC",
    "DAS_MAX_PAGES",
    "RPC_TIMEOUT_SEC",
    "PASS_FETCH_CONCURRENCY",
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_rpc_url_precedence(clean_env):
    assert get_solana_rpc_url() == "https://api.devnet.solana.com"

    clean_env.setenv("HELIUS_API_KEY", "k123")
    assert get_solana_rpc_url() == "https://devnet.helius-rpc.com/?api-key=k123"
    clean_env.setenv("SOLANA_NETWORK", "mainnet-beta")
    assert get_solana_rpc_url() == "https://mainnet.helius-rpc.com/?api-key=k123"

    clean_env.setenv("SOLANA_RPC_URL", "https://rpc.example/das")
    assert get_solana_rpc_url() == "https://rpc.example/das"


def test_mask_rpc_url():
    assert mask_rpc_url("https://mainnet.helius-rpc.com/?api-key=secret") == "https://mainnet.helius-rpc.com/?api-key=***"
    assert mask_rpc_url("https://rpc.example") == "https://rpc.example"


def test_get_settings_defaults(clean_env):
    settings = get_settings()
    assert settings.page_size == 1000
    assert settings.page_delay_sec == 0.1
    assert settings.max_pages == 1000
    assert settings.request_timeout_sec == 30.0
    assert settings.pass_concurrency == 8


def test_get_settings_from_env(clean_env):
    clean_env.setenv("SOLANA_RPC_URL", "https://rpc.example")
    clean_env.setenv("DAS_PAGE_SIZE", "250")
    clean_env.setenv("DAS_PAGE_DELAY_SEC", "0.5")
    clean_env.setenv("DAS_MAX_PAGES", "12")
    clean_env.setenv("RPC_TIMEOUT_SEC", "not-a-number")
    clean_env.setenv("PASS_FETCH_CONCURRENCY", "2")

    settings = get_settings()
    assert settings.rpc_url == "https://rpc.example"
    assert settings.page_size == 250
    assert settings.page_delay_sec == 0.5
    assert settings.max_pages == 12
    assert settings.request_timeout_sec == 30.0
    assert settings.pass_concurrency == 2


@pytest.mark.parametrize(
    "kwargs",
    [
        {"rpc_url": " "},
        {"rpc_url": "https://x", "page_size": 0},
        {"rpc_url": "https://x", "page_size": 1001},
        {"rpc_url": "https://x", "max_pages": 0},
        {"rpc_url": "https://x", "page_delay_sec": -1},
        {"rpc_url": "https://x", "pass_concurrency": 0},
    ],
)
def test_settings_validation(kwargs):
    with pytest.raises(InvalidArgument):
        Settings(**kwargs)
