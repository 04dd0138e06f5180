"""Solana address validation."""

from __future__ import annotations

from solders.pubkey import Pubkey

from backend_verxio.core.exceptions import InvalidArgument


def is_valid_address(value: str) -> bool:
    """Return True if value is a valid base58 Solana public key."""
    try:
        Pubkey.from_string(value.strip())
        return True
    except Exception:
        return False


def require_address(value: str | None, label: str = "Collection address") -> str:
    """Return the stripped address or raise InvalidArgument."""
    address = (value or "").strip()
    if not address:
        raise InvalidArgument(f"{label} is required")
    if not is_valid_address(address):
        raise InvalidArgument(f"{label} is not a valid Solana address: {address}")
    return address
