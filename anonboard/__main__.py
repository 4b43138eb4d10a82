"""
AnonBoard Entry Point

Usage:
    python -m anonboard                  # Run HTTP server
    python -m anonboard init-config      # Write default config
    python -m anonboard stats            # Show board statistics
    python -m anonboard reported         # List reported content
    python -m anonboard purge-orphans    # Delete unreachable threads/replies
    python -m anonboard --help           # Show help
"""

import argparse
import asyncio
import sys
import logging
from pathlib import Path

from . import __version__


def setup_logging(level: str, log_file: str | None = None):
    """Configure logging for the application."""
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    handlers = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        handlers=handlers
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anonboard",
        description="AnonBoard - Anonymous Message Board Backend"
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"AnonBoard {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=Path("config.toml"),
        help="Path to configuration file (default: config.toml)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from config, INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser("serve", help="Run HTTP server (default)")
    serve_parser.add_argument("--host", help="Override web.host")
    serve_parser.add_argument("--port", type=int, help="Override web.port")

    subparsers.add_parser("init-config", help="Write a default configuration file")
    subparsers.add_parser("stats", help="Show board statistics")
    subparsers.add_parser("reported", help="List reported threads and replies")

    purge_parser = subparsers.add_parser(
        "purge-orphans",
        help="Delete threads and replies no longer reachable from a board"
    )
    purge_parser.add_argument(
        "--grace-seconds",
        type=int,
        default=3600,
        help="Skip records newer than this (default: 3600)"
    )
    purge_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only count orphans"
    )

    return parser


def run_command(args, config) -> int:
    """Run a maintenance subcommand against an opened board."""
    from .core.board import MessageBoard
    from .core.maintenance import MaintenanceManager
    from .utils.formatting import truncate

    board = MessageBoard(config)
    board.setup()
    maintenance = MaintenanceManager(board)

    try:
        if args.command == "stats":
            for key, value in maintenance.get_stats().items():
                print(f"{key}: {value}")

        elif args.command == "reported":
            reported = maintenance.list_reported()
            for kind in ("threads", "replies"):
                print(f"Reported {kind}: {len(reported[kind])}")
                for item in reported[kind]:
                    print(f"  {item['id']}  {item['created_on']}  {truncate(item['text'], 60)}")

        elif args.command == "purge-orphans":
            if args.dry_run:
                found = maintenance.find_orphans(args.grace_seconds)
                print(f"Orphans: {found['threads']} threads, {found['replies']} replies")
            else:
                purged = asyncio.run(maintenance.purge_orphans(args.grace_seconds))
                print(f"Purged: {purged['threads']} threads, {purged['replies']} replies")

        return 0
    finally:
        board.shutdown()


def main():
    """Main entry point for AnonBoard."""
    parser = build_parser()
    args = parser.parse_args()

    from .config import load_config, create_default_config
    from .errors import BoardError

    if args.command == "init-config":
        setup_logging(args.log_level or "INFO")
        if args.config.exists():
            print(f"{args.config} already exists", file=sys.stderr)
            sys.exit(1)
        create_default_config(args.config)
        print(f"Wrote {args.config}")
        sys.exit(0)

    config = load_config(args.config)
    setup_logging(args.log_level or config.logging.level, config.logging.file or None)
    logger = logging.getLogger("anonboard")

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(f"Config error: {error}")
        sys.exit(1)

    if args.command in ("stats", "reported", "purge-orphans"):
        try:
            sys.exit(run_command(args, config))
        except BoardError as e:
            logger.error(f"{args.command} failed: {e.message}")
            sys.exit(1)

    # Default: run HTTP server
    from .core.board import MessageBoard
    from .web.app import create_app

    host = getattr(args, "host", None) or config.web.host
    port = getattr(args, "port", None) or config.web.port

    board = MessageBoard(config)
    try:
        board.setup()
        app = create_app(board)
        logger.info(f"Starting AnonBoard v{__version__} on {host}:{port}")
        app.run(host=host, port=port, debug=config.web.debug)
    except KeyboardInterrupt:
        logger.info("Shutdown requested")
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)
    finally:
        board.shutdown()


if __name__ == "__main__":
    main()
