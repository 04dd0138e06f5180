"""
Data models for DAS asset index output.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AssetRecord:
    """
    One asset of a collection as listed by getAssetsByGroup.

    Only the fields the aggregation needs are kept; identity is ``id``.
    """

    id: str
    owner_address: str

    @classmethod
    def from_rpc_item(cls, item: dict[str, Any]) -> "AssetRecord":
        """Build from a single getAssetsByGroup result item; raises KeyError/TypeError if malformed."""
        asset_id = item["id"]
        owner = item["ownership"]["owner"]
        if not isinstance(asset_id, str) or not isinstance(owner, str):
            raise TypeError("asset id and owner must be strings")
        return cls(id=asset_id, owner_address=owner)
