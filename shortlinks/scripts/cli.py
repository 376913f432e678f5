#!/usr/bin/env python3
"""
Command-line interface for the short link store.

Usage:
    shortlinks-cli init-db
    shortlinks-cli shorten <url> [--expires-in MINUTES]
    shortlinks-cli list
    shortlinks-cli get <id>
    shortlinks-cli info <short_code>
    shortlinks-cli resolve <short_code>
    shortlinks-cli update <id> [--url URL] [--expires-in MINUTES | --no-expiry]
    shortlinks-cli delete <id>
    shortlinks-cli health
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, Optional

from shortlinks.app import build_registry
from shortlinks.config import load_config
from shortlinks.lib.errors import ShortLinkError
from shortlinks.lib.database.postgres import PostgresShortLinkStore
from shortlinks.lib.common.logging_config import setup_logging
from shortlinks.lib.common.urls import build_short_url


class ShortLinkCLI:
    """Command-line interface over a LinkRegistry."""

    def __init__(
        self,
        db_url: str,
        redis_url: Optional[str] = None,
        base_url: str = "http://localhost:9200",
        verbose: bool = False,
    ):
        """Initialize CLI."""
        self.config = load_config().model_copy(update={
            "store_backend": "postgres",
            "database_url": db_url,
            "redis_url": redis_url,
            "base_url": base_url,
        })
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.registry = None

    async def initialize(self):
        """Initialize store, cache and registry."""
        self.registry = await build_registry(self.config, self.logger)

    async def cleanup(self):
        """Cleanup resources."""
        if self.registry:
            await self.registry.close()

    def _emit(self, payload: Dict[str, Any]) -> int:
        print(json.dumps({"success": True, **payload}, indent=2))
        return 0

    def _fail(self, error: str) -> int:
        print(json.dumps({"success": False, "error": error}, indent=2), file=sys.stderr)
        return 1

    def _describe(self, link) -> Dict[str, Any]:
        data = link.to_dict()
        data["short_url"] = build_short_url(
            link.short_code, self.config.base_url, self.config.path_prefix
        )
        return data

    async def run(self, args: argparse.Namespace) -> int:
        """Dispatch a parsed command, reporting core errors as JSON."""
        try:
            return await getattr(self, f"cmd_{args.command.replace('-', '_')}")(args)
        except ShortLinkError as e:
            return self._fail(f"{type(e).__name__}: {e}")

    async def cmd_init_db(self, args) -> int:
        store = self.registry.store
        if not isinstance(store, PostgresShortLinkStore):
            return self._fail("init-db requires the postgres backend")
        await store.create_tables()
        return self._emit({"message": "short_links table is ready"})

    async def cmd_shorten(self, args) -> int:
        link = await self.registry.create(args.url, args.expires_in)
        return self._emit({
            "link": self._describe(link),
            "message": f"Successfully shortened URL to: {link.short_code}",
        })

    async def cmd_list(self, args) -> int:
        links = await self.registry.find_all()
        return self._emit({
            "count": len(links),
            "links": [self._describe(link) for link in links],
        })

    async def cmd_get(self, args) -> int:
        return self._emit({"link": self._describe(await self.registry.find_by_id(args.id))})

    async def cmd_info(self, args) -> int:
        return self._emit({"link": self._describe(await self.registry.resolve_info(args.short_code))})

    async def cmd_resolve(self, args) -> int:
        link = await self.registry.resolve(args.short_code)
        return self._emit({"original_url": link.original_url, "clicks": link.clicks})

    async def cmd_update(self, args) -> int:
        patch: Dict[str, Any] = {}
        if args.url is not None:
            patch["original_url"] = args.url
        if args.no_expiry:
            patch["expires_in_minutes"] = None
        elif args.expires_in is not None:
            patch["expires_in_minutes"] = args.expires_in
        if not patch:
            return self._fail("Nothing to update")

        link = await self.registry.update(args.id, patch)
        return self._emit({"link": self._describe(link)})

    async def cmd_delete(self, args) -> int:
        await self.registry.remove(args.id)
        return self._emit({"message": f"Deleted short link {args.id}"})

    async def cmd_health(self, args) -> int:
        health_status = await self.registry.health_check()
        self._emit({"health": health_status})
        return 0 if health_status["overall"] else 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    config = load_config()

    parser = argparse.ArgumentParser(
        description="Short link CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL that expires in an hour
  %(prog)s shorten https://example.com/long/url --expires-in 60

  # Look up a code without counting a click
  %(prog)s info aB3xY9

  # Point an existing link somewhere else
  %(prog)s update 12 --url https://example.com/new
        """
    )

    parser.add_argument(
        "--db-url",
        default=config.database_url,
        help="PostgreSQL connection URL (default: from DATABASE_URL env)"
    )
    parser.add_argument(
        "--redis-url",
        default=config.redis_url,
        help="Redis connection URL (optional, default: from REDIS_URL env)"
    )
    parser.add_argument(
        "--base-url",
        default=config.base_url,
        help="Base URL used to print short URLs (default: from BASE_URL env)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("init-db", help="Create the short_links table")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--expires-in", type=int, help="Lifetime in minutes")

    subparsers.add_parser("list", help="List all short links")

    get_parser = subparsers.add_parser("get", help="Show a short link by id")
    get_parser.add_argument("id", type=int, help="Short link id")

    info_parser = subparsers.add_parser("info", help="Look up a short code without counting a click")
    info_parser.add_argument("short_code", help="Short code to lookup")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a short code and count a click")
    resolve_parser.add_argument("short_code", help="Short code to resolve")

    update_parser = subparsers.add_parser("update", help="Change a short link")
    update_parser.add_argument("id", type=int, help="Short link id")
    update_parser.add_argument("--url", help="New target URL")
    expiry_group = update_parser.add_mutually_exclusive_group()
    expiry_group.add_argument("--expires-in", type=int, help="New lifetime in minutes, counted from now")
    expiry_group.add_argument("--no-expiry", action="store_true", help="Remove the expiry")

    delete_parser = subparsers.add_parser("delete", help="Delete a short link")
    delete_parser.add_argument("id", type=int, help="Short link id")

    subparsers.add_parser("health", help="Check store and cache health")

    return parser


async def async_main(argv=None) -> int:
    """Parse arguments and run one command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = ShortLinkCLI(
        db_url=args.db_url,
        redis_url=args.redis_url,
        base_url=args.base_url,
        verbose=args.verbose,
    )

    try:
        await cli.initialize()
        return await cli.run(args)
    finally:
        await cli.cleanup()


def main():
    """Console script entry point."""
    sys.exit(asyncio.run(async_main()))


if __name__ == "__main__":
    main()
