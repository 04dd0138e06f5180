"""
Loyalty pass store package: models, DAS payload parsing and the DAS-backed store.
"""

from backend_verxio.pass_store.models import ActionRecord, PassState, ProgramMeta, RewardTier
from backend_verxio.pass_store.store import DasPassStore, PassStore

__all__ = [
    "ActionRecord",
    "DasPassStore",
    "PassState",
    "PassStore",
    "ProgramMeta",
    "RewardTier",
]
