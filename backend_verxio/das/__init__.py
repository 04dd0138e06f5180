"""
DAS asset index package.

Paginated getAssetsByGroup client and the AssetRecord it produces.
"""

from backend_verxio.das.client import AssetIndexClient
from backend_verxio.das.models import AssetRecord

__all__ = ["AssetIndexClient", "AssetRecord"]
