"""
Collection member aggregation.

Entry points: build_leaderboard, build_members, get_pass, get_program.
"""

from backend_verxio.aggregation.grouping import group_by_owner
from backend_verxio.aggregation.leaderboard import Leaderboard, MemberAggregate, build_leaderboard
from backend_verxio.aggregation.lookups import get_pass, get_program
from backend_verxio.aggregation.members import Member, MemberPass, build_members
from backend_verxio.aggregation.tiers import TierLevel, resolve_tier_and_level

__all__ = [
    "Leaderboard",
    "Member",
    "MemberAggregate",
    "MemberPass",
    "TierLevel",
    "build_leaderboard",
    "build_members",
    "get_pass",
    "get_program",
    "group_by_owner",
    "resolve_tier_and_level",
]
