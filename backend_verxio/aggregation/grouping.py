"""Owner grouping of collection assets."""

from __future__ import annotations

from typing import Iterable

from backend_verxio.das.models import AssetRecord


def group_by_owner(assets: Iterable[AssetRecord]) -> dict[str, list[AssetRecord]]:
    """
    Partition assets by current owner.

    Owners appear in first-encounter order and each owner's assets keep
    their relative order from the input.
    """
    groups: dict[str, list[AssetRecord]] = {}
    for asset in assets:
        groups.setdefault(asset.owner_address, []).append(asset)
    return groups
