"""coaclient entry point.

Manages locally registered OAuth2 client applications and shows cached
tokens. Token exchange itself happens elsewhere; this CLI only touches the
files under the storage directory.
"""

from __future__ import annotations

import argparse
import logging
import sys

from coaclient.config import Settings, get_settings
from coaclient.errors import CreateClientAppError
from coaclient.logging_setup import setup_logging
from coaclient.registry import ClientRegistry

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coaclient",
        description="Manage OAuth2 client applications and cached tokens",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  coaclient add work id-1 secret-1 -s read -s write
  coaclient list
  coaclient show id-1
  coaclient tokens work
  coaclient delete work
""",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING). Defaults to COACLIENT_LOG_LEVEL",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Register a client application")
    add.add_argument("name")
    add.add_argument("client_id")
    add.add_argument("secret")
    add.add_argument(
        "--scope", "-s", action="append", default=[], dest="scopes", help="Scope (repeatable)"
    )

    sub.add_parser("list", help="List registered client applications")

    show = sub.add_parser("show", help="Show a client by name or client id")
    show.add_argument("identifier")

    delete = sub.add_parser("delete", help="Delete a client and its cached tokens")
    delete.add_argument("name")

    tokens = sub.add_parser("tokens", help="Show cached tokens for a client")
    tokens.add_argument("name")

    return parser


def _dedupe(scopes: list[str]) -> list[str]:
    return list(dict.fromkeys(scopes))


def main(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    """Run the CLI. Returns the process exit code."""
    args = _build_parser().parse_args(argv)
    settings = settings or get_settings()
    setup_logging(level=args.log_level or settings.log_level)
    logger.debug("Using storage directory %s", settings.storage_dir)
    registry = ClientRegistry(settings)

    if args.command == "add":
        try:
            registry.register(args.name, args.client_id, args.secret, _dedupe(args.scopes))
        except CreateClientAppError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Client {args.name} added.")
        return 0

    if args.command == "list":
        clients = registry.list_clients()
        if not clients:
            print("No client applications registered.")
            return 0
        for c in clients:
            print(f"{c.name}\t{c.client_id}\t{' '.join(c.scope_list)}")
        return 0

    if args.command == "show":
        client = registry.find_client(args.identifier)
        if client is None:
            print(f"Client {args.identifier} not found.", file=sys.stderr)
            return 1
        print(f"name:      {client.name}")
        print(f"client id: {client.client_id}")
        print(f"scopes:    {' '.join(client.scope_list)}")
        return 0

    if args.command == "delete":
        result = registry.delete_client(args.name)
        if not result.ok:
            print(f"Error: {result.error}", file=sys.stderr)
            return 1
        if not result.value:
            print(f"Client {args.name} not found.", file=sys.stderr)
            return 1
        print(f"Client {args.name} deleted.")
        return 0

    if args.command == "tokens":
        tokens = registry.load_tokens(args.name)
        if tokens is None:
            print(f"No cached tokens for {args.name}.", file=sys.stderr)
            return 1
        print(f"access token: {tokens.access_token}")
        print(f"expires in:   {tokens.expires_in}")
        return 0

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
