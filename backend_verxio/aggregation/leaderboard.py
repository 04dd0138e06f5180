"""
Leaderboard assembly: assets -> owner groups -> pass XP -> tiers -> ranked members.

Single entrypoint build_leaderboard(collection_address). Output ordering depends
only on total XP (descending) with ties kept in owner first-appearance order;
fetch completion order never matters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from backend_verxio.aggregation.enricher import PassEnricher
from backend_verxio.aggregation.grouping import group_by_owner
from backend_verxio.aggregation.resources import AssetIndex, open_collaborators
from backend_verxio.aggregation.tiers import resolve_tier_and_level
from backend_verxio.config.settings import Settings, get_settings
from backend_verxio.core.exceptions import InvalidArgument, LeaderboardBuildFailed
from backend_verxio.das.models import AssetRecord
from backend_verxio.pass_store.models import PassState, RewardTier
from backend_verxio.pass_store.store import PassStore
from backend_verxio.utils.address import require_address
from backend_verxio.verxio_logging import bind_collection


@dataclass
class MemberAggregate:
    """One owner's leaderboard row; rank is assigned after the global sort."""

    address: str
    primary_asset_id: str
    total_xp: int
    last_action: str | None
    tier_name: str
    level: int
    rank: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "assetAddress": self.primary_asset_id,
            "totalXp": self.total_xp,
            "lastAction": self.last_action,
            "currentTier": self.tier_name,
            "currentLevel": str(self.level),
            "level": self.level,
            "rank": self.rank,
        }


@dataclass
class Leaderboard:
    members: list[MemberAggregate] = field(default_factory=list)
    program_name: str = ""
    total_minted: int = 0
    total_members: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "members": [m.to_dict() for m in self.members],
            "programName": self.program_name,
            "totalMinted": self.total_minted,
            "totalMembers": self.total_members,
        }


def aggregate_member(
    address: str,
    assets: Sequence[AssetRecord],
    states: Sequence[PassState | None],
) -> MemberAggregate:
    """
    Fold one owner's pass states (aligned with assets) into a leaderboard row.

    Absent states add nothing. The tier table is taken from the first state,
    in asset order, that has one. last_action is the greatest by plain string
    comparison, which orders same-format ISO-8601 timestamps correctly.
    """
    total_xp = 0
    last_action: str | None = None
    tiers: Sequence[RewardTier] = ()
    for state in states:
        if state is None:
            continue
        total_xp += state.xp
        if state.last_action and (last_action is None or state.last_action > last_action):
            last_action = state.last_action
        if not tiers and state.reward_tiers:
            tiers = state.reward_tiers

    tier = resolve_tier_and_level(total_xp, tiers)
    return MemberAggregate(
        address=address,
        primary_asset_id=assets[0].id if assets else "",
        total_xp=total_xp,
        last_action=last_action,
        tier_name=tier.tier_name,
        level=tier.level,
    )


def rank_members(members: list[MemberAggregate]) -> list[MemberAggregate]:
    """Stable sort by total XP descending and assign 1-based ranks in place."""
    ranked = sorted(members, key=lambda m: m.total_xp, reverse=True)
    for index, member in enumerate(ranked):
        member.rank = index + 1
    return ranked


async def build_leaderboard(
    collection_address: str,
    *,
    settings: Settings | None = None,
    index_client: AssetIndex | None = None,
    pass_store: PassStore | None = None,
) -> Leaderboard:
    """
    Build the ranked leaderboard for a loyalty collection.

    Raises InvalidArgument for a blank/invalid address before any request;
    any other fatal failure (asset index, program details) is raised as
    LeaderboardBuildFailed chained to its cause. Per-asset pass failures only
    lower that owner's XP.
    """
    address = require_address(collection_address)
    settings = settings or get_settings()
    log = bind_collection(address)
    log.info("leaderboard_build_start")

    try:
        async with open_collaborators(settings, index_client, pass_store) as (index, store):
            assets = list(await index.fetch_all_assets(address))
            groups = group_by_owner(assets)

            enricher = PassEnricher(store, settings.pass_concurrency)
            states = await enricher.enrich_many([a.id for a in assets])
            state_by_asset = dict(zip((a.id for a in assets), states))

            members = [
                aggregate_member(owner, owned, [state_by_asset[a.id] for a in owned])
                for owner, owned in groups.items()
            ]
            ranked = rank_members(members)

            program = await store.get_program_details(address)
    except InvalidArgument:
        raise
    except Exception as e:
        log.error("leaderboard_build_failed", error_type=type(e).__name__, error=str(e))
        raise LeaderboardBuildFailed("Failed to fetch leaderboard", cause=e) from e

    board = Leaderboard(
        members=ranked,
        program_name=program.name,
        total_minted=len(assets),
        total_members=len(ranked),
    )
    log.info(
        "leaderboard_built",
        total_minted=board.total_minted,
        total_members=board.total_members,
        program_name=board.program_name,
    )
    return board
