from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

import uvicorn
from dotenv import load_dotenv

from listingclaim.app import upgrade_database
from listingclaim.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

APP_IMPORT_PATH = "listingclaim.ui.http.app:create_app"


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Listing claim service")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: %(default)s)")
    serve.add_argument("--port", type=int, default=8000, help="Port to bind (default: %(default)s)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.add_argument(
        "--proxy-headers",
        action="store_true",
        help="Trust X-Forwarded-* headers from the reverse proxy",
    )

    db = subparsers.add_parser("db", help="Database management commands")
    db_sub = db.add_subparsers(dest="db_command", required=True)
    upgrade = db_sub.add_parser("upgrade", help="Apply schema migrations")
    upgrade.add_argument(
        "--revision",
        default="head",
        help="Target revision (default: %(default)s)",
    )
    upgrade.add_argument(
        "--database-uri",
        type=str,
        help="Database to migrate (defaults to DATABASE_URI or the data directory)",
    )

    return parser.parse_args(list(argv))


def _serve(args: argparse.Namespace) -> None:
    log.info("Serving claims API on %s:%s", args.host, args.port)
    uvicorn.run(
        APP_IMPORT_PATH,
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        proxy_headers=args.proxy_headers,
        log_config=None,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        if parsed_args.command == "serve":
            _serve(parsed_args)
        elif parsed_args.command == "db" and parsed_args.db_command == "upgrade":
            asyncio.run(
                upgrade_database(
                    database_uri=parsed_args.database_uri,
                    revision=parsed_args.revision,
                )
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
