"""Command-line entrypoint for the CSDN blog sync.

This script orchestrates the high-level flow:
1) load configuration
2) fetch the RSS feed and scrape each article
3) write Markdown files and merge the JSON post index
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from .errors import FormatError, NetworkError
from .orchestrator import SyncOrchestrator
from .utils.config_loader import ConfigError, apply_overrides, load_sync_config
from .utils.logging import configure_logging, get_logger


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Sync CSDN blog posts into Markdown files and a JSON index"
    )
    parser.add_argument(
        "--config",
        default="config/sync.yaml",
        help="Path to the sync configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--username",
        default=None,
        help="CSDN account to sync (overrides config and CSDN_USERNAME)",
    )
    parser.add_argument(
        "--max-posts",
        type=int,
        default=None,
        help="Maximum number of feed items to process",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Fetch and convert articles but do not write any files",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    # Optional: load .env
    try:
        from dotenv import load_dotenv  # type: ignore

        load_dotenv(override=False)
    except ImportError:
        pass
    args = parse_args(argv)
    configure_logging(level=args.log_level)
    logger = get_logger("csdn_sync.main")

    logger.info("Loading sync configuration from %s", args.config)
    try:
        config = load_sync_config(args.config)
        config = apply_overrides(config, username=args.username, max_posts=args.max_posts)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    logger.info("Starting CSDN sync for %s", config.username)
    try:
        report = SyncOrchestrator(config, dry_run=args.dry_run).run()
    except (NetworkError, FormatError) as exc:
        logger.error("Sync failed: %s", exc)
        return 1

    logger.info("Sync complete: %d post(s) in index\n%s", report.total_posts, report.to_markdown())
    return 0


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
