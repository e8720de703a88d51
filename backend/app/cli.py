"""Command-line entry point.

Usage:
    quotedesk -i <quotes.db>    create and initialize a new store file
    quotedesk <quotes.db>       start the web service using the store file
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

import uvicorn

from app.config.logging_setup import setup_logging
from app.config.settings import settings
from app.db.init import DatabaseError, initialize_database
from app.main import create_app

USAGE = """Usage:

Start webservice using database file:
\tquotedesk <quotes.db>

Initialize new database file:
\tquotedesk -i <quotes.db>
"""


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quotedesk", description="Latest quote lookup service")
    parser.add_argument(
        "-i",
        dest="init_file",
        metavar="NEW_FILE",
        default=None,
        help="Create and initialize a new database file",
    )
    parser.add_argument("dbfile", nargs="?", default=None, help="Database file to serve with")
    return parser


def cmd_init(path: Path) -> int:
    try:
        asyncio.run(initialize_database(path))
    except DatabaseError as exc:
        print(exc)
        return 1
    return 0


def cmd_serve(path: Path) -> int:
    if not path.exists():
        print(
            f"Database file '{path}' doesn't exist. Create one using:\n"
            f"\tquotedesk -i <quotes.db>"
        )
        return 1

    app = create_app(db_path=path)
    print(f"Listening on {settings.port}...")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    setup_logging(settings.log_level)
    args = create_parser().parse_args(argv)

    if args.init_file:
        return cmd_init(Path(args.init_file))

    if not args.dbfile:
        print(USAGE)
        return 0

    return cmd_serve(Path(args.dbfile))


def cli_entry() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli_entry()
