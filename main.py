"""
Main entrypoint: run one collection report and print it as JSON.

    python main.py leaderboard <collection_address>
    python main.py members <collection_address>
    python main.py pass <asset_address>
    python main.py program <collection_address>

Env: SOLANA_RPC_URL or HELIUS_API_KEY, SOLANA_NETWORK, DAS_* knobs, LOG_LEVEL, LOG_FORMAT.
"""

import sys

# Configure structured logging before other imports that may log
from backend_verxio.verxio_logging import get_logger

logger = get_logger("main")


def main(argv: list[str] | None = None) -> int:
    from backend_verxio import __version__
    from backend_verxio.tools.collection_report import main as report_main

    argv = sys.argv[1:] if argv is None else argv
    logger.info("main_start", version=__version__, argv=argv)
    code = report_main(argv)
    logger.info("main_exit", exit_code=code)
    return code


if __name__ == "__main__":
    sys.exit(main())
