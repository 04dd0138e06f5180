"""
Tests for tier/level resolution, including the "Grind" base tier.
"""

from __future__ import annotations

from conftest import TIERS

from backend_verxio.aggregation.tiers import TierLevel, resolve_tier_and_level
from backend_verxio.pass_store.models import RewardTier


def test_highest_qualifying_tier():
    assert resolve_tier_and_level(150, TIERS) == TierLevel("Silver", 2)
    assert resolve_tier_and_level(100, TIERS) == TierLevel("Silver", 2)
    assert resolve_tier_and_level(99, TIERS) == TierLevel("Bronze", 1)
    assert resolve_tier_and_level(10_000, TIERS) == TierLevel("Gold", 3)


def test_zero_xp_is_grind_regardless_of_tiers():
    assert resolve_tier_and_level(0, TIERS) == TierLevel("Grind", 0)
    assert resolve_tier_and_level(0, ()) == TierLevel("Grind", 0)


def test_tier_named_grind_any_case_is_level_zero():
    tiers = (RewardTier("grind", 0), RewardTier("Pro", 1000))
    assert resolve_tier_and_level(50, tiers) == TierLevel("Grind", 0)
    assert resolve_tier_and_level(1500, tiers) == TierLevel("Pro", 2)
    assert resolve_tier_and_level(50, (RewardTier("GRIND", 0),)) == TierLevel("Grind", 0)


def test_no_tiers_with_xp():
    """Empty table: empty tier name at level 1."""
    assert resolve_tier_and_level(42, ()) == TierLevel("", 1)


def test_below_first_requirement_reports_first_tier():
    tiers = (RewardTier("Bronze", 50), RewardTier("Silver", 100))
    assert resolve_tier_and_level(10, tiers) == TierLevel("Bronze", 1)


def test_later_qualifying_tier_wins():
    """Table order decides, not the requirement value."""
    tiers = (RewardTier("A", 0), RewardTier("B", 200), RewardTier("C", 100))
    assert resolve_tier_and_level(250, tiers) == TierLevel("C", 3)
    assert resolve_tier_and_level(150, tiers) == TierLevel("C", 3)
