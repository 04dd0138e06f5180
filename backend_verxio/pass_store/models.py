"""
Loyalty pass and program models read from the pass store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RewardTier:
    """A named reward bracket unlocked at xp_required."""

    name: str
    xp_required: int
    rewards: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "xpRequired": self.xp_required, "rewards": list(self.rewards)}


@dataclass(frozen=True)
class ActionRecord:
    type: str
    points: int
    timestamp: str | int | None


@dataclass(frozen=True)
class PassState:
    """
    Loyalty state attached to one asset.

    reward_tiers comes from the pass's program, ordered ascending by requirement.
    """

    asset_id: str
    xp: int
    last_action: str | None = None
    current_tier: str = ""
    action_history: tuple[ActionRecord, ...] = ()
    reward_tiers: tuple[RewardTier, ...] = ()
    name: str = ""
    owner: str | None = None
    collection: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "pass": self.asset_id,
            "name": self.name,
            "owner": self.owner,
            "collection": self.collection,
            "xp": self.xp,
            "lastAction": self.last_action,
            "currentTier": self.current_tier,
            "actionHistory": [
                {"type": a.type, "points": a.points, "timestamp": a.timestamp}
                for a in self.action_history
            ],
            "rewardTiers": [t.to_dict() for t in self.reward_tiers],
        }


@dataclass(frozen=True)
class ProgramMeta:
    """Program (collection) details; one fetch per leaderboard request."""

    name: str
    num_minted: int
    collection_address: str = ""
    tiers: tuple[RewardTier, ...] = ()
    points_per_action: dict[str, int] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "numMinted": self.num_minted,
            "collectionAddress": self.collection_address,
            "tiers": [t.to_dict() for t in self.tiers],
            "pointsPerAction": dict(self.points_per_action),
            "metadata": dict(self.metadata),
        }
