"""Command-line interface for the user service: serve the API or run schema migrations."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from alembic import command
from alembic.config import Config

from user_service.config import Settings, get_settings, to_async_url
from user_service.infrastructure.observability import setup_logging

logger = logging.getLogger("user_service.cli")

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"
_KNOWN_COMMANDS = {"serve", "migrate"}


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="User service")
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="serve")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API")
    serve_parser.add_argument(
        "--addr",
        default=None,
        help="host:port to listen on (default: SERVER_ADDR)",
    )

    migrate_parser = subparsers.add_parser(
        "migrate", aliases=["m"], help="Database migration",
    )
    migrate_parser.add_argument(
        "direction",
        choices=("up", "down"),
        help="up: roll forward to head, down: roll back one revision",
    )
    migrate_parser.add_argument(
        "--conn",
        "-c",
        default=None,
        help="Database connection URL (default: DB_CONN)",
    )

    args_list = list(argv) if argv is not None else sys.argv[1:]
    if args_list and args_list[0] not in _KNOWN_COMMANDS | {"m"}:
        if not any(flag in args_list for flag in ("-h", "--help")):
            args_list = ["serve", *args_list]
    return parser.parse_args(args_list)


def alembic_config(database_url: str) -> Config:
    """Alembic configuration pointing at the packaged migrations."""
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option(
        "sqlalchemy.url", to_async_url(database_url).replace("%", "%%"),
    )
    return cfg


def migrate(direction: str, database_url: str) -> None:
    cfg = alembic_config(database_url)
    if direction == "up":
        command.upgrade(cfg, "head")
    else:
        command.downgrade(cfg, "-1")
    logger.info("migration %s finished", direction)


def serve(settings: Settings, addr: str | None = None) -> None:
    from user_service.main import create_app
    import uvicorn

    if addr:
        settings = settings.model_copy(update={"server_addr": addr})
    logger.info("Starting user service on %s", settings.server_addr)
    uvicorn.run(
        create_app(settings),
        host=settings.server_host,
        port=settings.server_port,
        log_config=None,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    setup_logging(
        settings.log_level,
        settings.log_format,
        caller=settings.log_caller,
        stack_trace=settings.log_stack_trace,
        version=settings.version,
    )

    if args.command in ("migrate", "m"):
        migrate(args.direction, args.conn or settings.db_conn)
        return 0

    serve(settings, getattr(args, "addr", None))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
