"""
Single-entity lookups: one loyalty pass, one loyalty program.
"""

from __future__ import annotations

from backend_verxio.aggregation.resources import open_collaborators
from backend_verxio.config.settings import Settings, get_settings
from backend_verxio.core.exceptions import PassNotFound
from backend_verxio.pass_store.models import PassState, ProgramMeta
from backend_verxio.pass_store.store import PassStore
from backend_verxio.utils.address import require_address
from backend_verxio.verxio_logging import get_logger

logger = get_logger(__name__)


async def get_pass(
    asset_address: str,
    *,
    settings: Settings | None = None,
    pass_store: PassStore | None = None,
) -> PassState:
    """
    Pass state for one asset, with its collection's reward tiers.

    Raises PassNotFound when the asset is not a loyalty pass. The tiers come
    from the pass's collection, so a collection the indexer does not know
    raises ProgramNotFound, and an unreadable one PassFetchFailure, even
    though the pass itself was read.
    """
    address = require_address(asset_address, "Pass address")
    settings = settings or get_settings()
    async with open_collaborators(settings, pass_store=pass_store) as (_, store):
        state = await store.get_pass_data(address)
    if state is None:
        logger.warning("pass_not_found", asset_id=address)
        raise PassNotFound(f"Loyalty pass not found: {address}")
    return state


async def get_program(
    collection_address: str,
    *,
    settings: Settings | None = None,
    pass_store: PassStore | None = None,
) -> ProgramMeta:
    """Program details for one collection; ProgramNotFound when the indexer does not know it."""
    address = require_address(collection_address)
    settings = settings or get_settings()
    async with open_collaborators(settings, pass_store=pass_store) as (_, store):
        return await store.get_program_details(address)
