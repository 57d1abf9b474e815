"""
Script to run every archive set in a configuration file

Usage:
    python -m scripts.run_archive [config-file]
"""

import asyncio
import sys
import logging

from archiver.runner import ArchiveRunner
from core.logging import setup_logging

logger = logging.getLogger(__name__)


async def run_archive(config_file: str = "") -> dict:
    """Run the archive once for ``config_file`` (or the configured default)."""
    runner = ArchiveRunner()
    return await runner.run(config_file or None)


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    config_file = argv[0] if argv else ""

    setup_logging()

    try:
        asyncio.run(run_archive(config_file))
    except Exception as e:
        logger.exception(f"Archive run error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
