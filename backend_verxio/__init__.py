"""
backend_verxio: member aggregation for Verxio loyalty collections on Solana.

Reads the assets of a loyalty collection from a DAS indexer, groups them by
owner, enriches each asset with its loyalty-pass state and assembles a ranked
leaderboard or a per-member pass listing.
"""

__version__ = "0.1.0"
