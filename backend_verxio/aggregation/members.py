"""
Member detail assembly: every owner with the full state of each of their passes.

No ranking; members are ordered by total XP descending, ties in owner
first-appearance order. Assets whose pass state cannot be read are left out.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from backend_verxio.aggregation.enricher import PassEnricher
from backend_verxio.aggregation.grouping import group_by_owner
from backend_verxio.aggregation.resources import AssetIndex, open_collaborators
from backend_verxio.config.settings import Settings, get_settings
from backend_verxio.core.exceptions import InvalidArgument, MembersBuildFailed
from backend_verxio.pass_store.models import PassState
from backend_verxio.pass_store.store import PassStore
from backend_verxio.utils.address import require_address
from backend_verxio.verxio_logging import bind_collection


@dataclass(frozen=True)
class MemberAction:
    action: str
    points: int
    timestamp: str


@dataclass(frozen=True)
class MemberPass:
    public_key: str
    name: str
    xp: int
    action_history: tuple[MemberAction, ...]
    current_tier: str

    @classmethod
    def from_pass_state(cls, state: PassState) -> "MemberPass":
        return cls(
            public_key=state.asset_id,
            name=state.name,
            xp=state.xp,
            action_history=tuple(
                MemberAction(
                    action=a.type,
                    points=a.points,
                    timestamp="" if a.timestamp is None else str(a.timestamp),
                )
                for a in state.action_history
            ),
            current_tier=state.current_tier,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "publicKey": self.public_key,
            "name": self.name,
            "xp": self.xp,
            "actionHistory": [
                {"action": a.action, "points": a.points, "timestamp": a.timestamp}
                for a in self.action_history
            ],
            "currentTier": self.current_tier,
        }


@dataclass
class Member:
    address: str
    passes: list[MemberPass] = field(default_factory=list)
    total_xp: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "passes": [p.to_dict() for p in self.passes],
            "totalXp": self.total_xp,
        }


async def build_members(
    collection_address: str,
    *,
    settings: Settings | None = None,
    index_client: AssetIndex | None = None,
    pass_store: PassStore | None = None,
) -> list[Member]:
    """
    List every owner of the collection with their readable passes.

    Raises InvalidArgument for a blank/invalid address before any request;
    other fatal failures are raised as MembersBuildFailed chained to the cause.
    """
    address = require_address(collection_address)
    settings = settings or get_settings()
    log = bind_collection(address)
    log.info("members_build_start")

    try:
        async with open_collaborators(settings, index_client, pass_store) as (index, store):
            assets = list(await index.fetch_all_assets(address))
            groups = group_by_owner(assets)

            enricher = PassEnricher(store, settings.pass_concurrency)
            states = await enricher.enrich_many([a.id for a in assets])
            state_by_asset = dict(zip((a.id for a in assets), states))
    except InvalidArgument:
        raise
    except Exception as e:
        log.error("members_build_failed", error_type=type(e).__name__, error=str(e))
        raise MembersBuildFailed("Failed to fetch members", cause=e) from e

    members: list[Member] = []
    for owner, owned in groups.items():
        passes = [
            MemberPass.from_pass_state(state)
            for state in (state_by_asset[a.id] for a in owned)
            if state is not None
        ]
        members.append(Member(address=owner, passes=passes, total_xp=sum(p.xp for p in passes)))

    members.sort(key=lambda m: m.total_xp, reverse=True)
    log.info(
        "members_built",
        total_members=len(members),
        total_passes=sum(len(m.passes) for m in members),
    )
    return members
