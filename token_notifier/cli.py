"""Token Notifier CLI."""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from token_notifier import paths
from token_notifier.config import Settings, log_level_from_env
from token_notifier.daemon import NotifierDaemon
from token_notifier.errors import StorageError, TokenNotifierError, ValidationError
from token_notifier.notifier.channels import TelegramChannel
from token_notifier.observability import configure_logging
from token_notifier.store import TokenStore

logger = logging.getLogger(__name__)

LIST_WIDTHS = (20, 15)


def print_table(headers: list, rows: list, widths: tuple = LIST_WIDTHS):
    """Print name/expiry/last-notified rows with fixed leading column widths."""
    name_w, expires_w = widths
    print(f"{headers[0]:<{name_w}} {headers[1]:<{expires_w}} {headers[2]}")
    print("-" * 50)
    for name, expires, last in rows:
        print(f"{name:<{name_w}} {expires:<{expires_w}} {last}")


def _open_store(args) -> TokenStore:
    if args.db:
        db = Path(args.db).expanduser()
    else:
        try:
            db = paths.db_path()
        except OSError as e:
            raise StorageError(f"Could not prepare data directory: {e}") from e
    return TokenStore(db)


def _build_daemon(args) -> NotifierDaemon:
    # Settings first: a misconfigured daemon must not touch the store.
    settings = Settings.from_env()
    store = _open_store(args)
    channel = TelegramChannel(
        bot_token=settings.telegram_bot_token,
        chat_id=settings.telegram_chat_id,
        dry_run=args.dry_run,
    )
    return NotifierDaemon(store=store, channel=channel, settings=settings)


def cmd_add(args) -> int:
    """Track a token (replaces an existing one with the same name)."""
    store = _open_store(args)
    store.add(args.name, args.expires_at)
    print(f"Token '{args.name}' added successfully!")
    return 0


def cmd_remove(args) -> int:
    """Stop tracking a token."""
    store = _open_store(args)
    store.remove(args.name)
    print(f"Token '{args.name}' removed successfully!")
    return 0


def cmd_list(args) -> int:
    """Show all tracked tokens."""
    store = _open_store(args)
    records = store.list()
    print("Tracked Tokens:")
    print_table(["Name", "Expires", "Last Notified"], [r.display_row() for r in records])
    return 0


def cmd_check(args) -> int:
    """Run one sweep and report what happened."""
    daemon = _build_daemon(args)
    result = daemon.run_once()
    print(
        f"Checked {len(result.due)} due token(s): "
        f"{len(result.notified)} notified, {len(result.failed)} failed"
        + (f", {len(result.dry_run)} dry run" if args.dry_run else "")
    )
    if result.aborted:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1
    return 0


def cmd_daemon(args) -> int:
    """Run the check loop until interrupted."""
    daemon = _build_daemon(args)
    try:
        daemon.run()
    except KeyboardInterrupt:
        daemon.stop()
        logger.info("Interrupted")
    return 0


COMMANDS = {
    "add": cmd_add,
    "remove": cmd_remove,
    "list": cmd_list,
    "check": cmd_check,
    "daemon": cmd_daemon,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="token-notifier",
        description="Track token expiry dates and send Telegram reminders",
    )
    parser.add_argument("--db", help=f"Database file (default: ${paths.APP_ENV_DB} or app home)")
    parser.add_argument("--env-file", help="Settings file to load (default: nearest .env)")
    parser.add_argument("--log-level", help="Log level (default: $TOKEN_NOTIFIER_LOG_LEVEL or INFO)")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Commands")

    p = subparsers.add_parser("add", help="Add a new token to track")
    p.add_argument("name", help="Token name")
    p.add_argument("expires_at", help="Expiry date (YYYY-MM-DD)")

    p = subparsers.add_parser("remove", help="Remove a token from tracking")
    p.add_argument("name", help="Token name")

    subparsers.add_parser("list", help="List all tracked tokens")

    for name, help_text in (
        ("daemon", "Start the notification daemon"),
        ("check", "Run a single check and exit"),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("--dry-run", action="store_true", help="Log notifications instead of sending")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.env_file:
        load_dotenv(args.env_file)
    else:
        load_dotenv(find_dotenv(usecwd=True))
    configure_logging(args.log_level or log_level_from_env())

    try:
        return COMMANDS[args.command](args)
    except ValidationError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1
    except TokenNotifierError as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
