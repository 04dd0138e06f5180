"""
Print a loyalty collection's leaderboard, member listing, a pass or a program as JSON.

How to run:
    From project root (with .env configured):
        py -m backend_verxio.tools.collection_report leaderboard <collection_address>
        py -m backend_verxio.tools.collection_report members <collection_address>
        py -m backend_verxio.tools.collection_report pass <asset_address>
        py -m backend_verxio.tools.collection_report program <collection_address>
    Or via the installed script: verxio-board leaderboard <collection_address>

Required env vars:
    SOLANA_RPC_URL or HELIUS_API_KEY  (DAS-capable RPC; public RPCs do not serve getAssetsByGroup)

Optional:
    SOLANA_NETWORK, DAS_PAGE_SIZE, DAS_PAGE_DELAY_SEC, DAS_MAX_PAGES,
    RPC_TIMEOUT_SEC, PASS_FETCH_CONCURRENCY, LOG_LEVEL, LOG_FORMAT
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from backend_verxio.aggregation import build_leaderboard, build_members, get_pass, get_program
from backend_verxio.config.env import mask_rpc_url
from backend_verxio.config.settings import Settings, get_settings
from backend_verxio.core.exceptions import VerxioError
from backend_verxio.verxio_logging import get_logger

logger = get_logger(__name__)

COMMANDS = ("leaderboard", "members", "pass", "program")


async def run(command: str, address: str, settings: Settings) -> Any:
    """Run one command and return its JSON-ready payload."""
    if command == "leaderboard":
        board = await build_leaderboard(address, settings=settings)
        return board.to_dict()
    if command == "members":
        members = await build_members(address, settings=settings)
        return [m.to_dict() for m in members]
    if command == "pass":
        state = await get_pass(address, settings=settings)
        return state.to_dict()
    if command == "program":
        program = await get_program(address, settings=settings)
        return program.to_dict()
    raise ValueError(f"Unknown command: {command}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Aggregate Verxio loyalty collection members from a DAS indexer.",
    )
    parser.add_argument("command", choices=COMMANDS, help="What to fetch")
    parser.add_argument("address", help="Collection address (pass: asset address)")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2; 0 for compact)")
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
        logger.info(
            "collection_report_start",
            command=args.command,
            address=args.address,
            rpc_url=mask_rpc_url(settings.rpc_url),
        )
        payload = asyncio.run(run(args.command, args.address, settings))
    except VerxioError as e:
        logger.error("collection_report_failed", command=args.command, code=e.code, error=e.message)
        print(json.dumps(e.to_dict()), file=sys.stderr)
        return 1

    print(json.dumps(payload, indent=args.indent or None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
