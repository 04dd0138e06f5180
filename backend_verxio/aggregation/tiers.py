"""
Tier and level resolution from accumulated XP.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from backend_verxio.pass_store.models import RewardTier

BASE_TIER_NAME = "Grind"
BASE_LEVEL = 0


class TierLevel(NamedTuple):
    tier_name: str
    level: int


def resolve_tier_and_level(total_xp: int, reward_tiers: Sequence[RewardTier]) -> TierLevel:
    """
    Highest tier (by position) whose xp_required <= total_xp, with its 1-based level.

    When no tier qualifies the first tier is reported at level 1 (empty name
    when there are no tiers). Zero XP, or a resolved tier named "grind" in any
    case, is always reported as the base tier ("Grind", 0).
    """
    level = 1
    tier_name = reward_tiers[0].name if reward_tiers else ""
    for index, tier in enumerate(reward_tiers):
        if total_xp >= tier.xp_required:
            level = index + 1
            tier_name = tier.name

    if total_xp == 0 or tier_name.lower() == BASE_TIER_NAME.lower():
        return TierLevel(BASE_TIER_NAME, BASE_LEVEL)
    return TierLevel(tier_name, level)
