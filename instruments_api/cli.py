"""Command line front end for the instruments API.

Examples:
  instruments-cli list
  instruments-cli get 1
  instruments-cli create --name Guitar --type String --price 199.99 --description "6-string"
  instruments-cli update 1 --name Guitar --type String --price 149.99 --description "6-string"
  instruments-cli delete 1
  instruments-cli --base-url http://api.example:8089 list

Exit codes:
  0 = success
  2 = request failed (message on stderr)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Optional, Sequence

from .client import InstrumentClient, InstrumentClientError
from .core.config import get_settings
from .core.logging import configure_logging
from .schemas.instrument import InstrumentIn


def _add_field_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--name", required=True)
    p.add_argument("--type", required=True, help="Free-form category, e.g. 'String'.")
    p.add_argument("--price", type=float, required=True)
    p.add_argument("--description", required=True)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    p = argparse.ArgumentParser(prog="instruments-cli", description="Manage instruments through the REST API.")
    p.add_argument("--base-url", default=settings.CLIENT_BASE_URL,
                   help=f"API base URL (default: {settings.CLIENT_BASE_URL})")
    p.add_argument("--timeout", type=float, default=settings.CLIENT_TIMEOUT,
                   help="HTTP timeout in seconds")
    p.add_argument("-v", "--verbose", action="store_true", help="Log client failures to stderr.")

    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List every instrument.")
    get_p = sub.add_parser("get", help="Show one instrument.")
    get_p.add_argument("id", type=int)
    create_p = sub.add_parser("create", help="Create an instrument.")
    _add_field_args(create_p)
    update_p = sub.add_parser("update", help="Replace an instrument's fields.")
    update_p.add_argument("id", type=int)
    _add_field_args(update_p)
    delete_p = sub.add_parser("delete", help="Delete an instrument.")
    delete_p.add_argument("id", type=int)
    return p


def _fields(args: argparse.Namespace) -> InstrumentIn:
    return InstrumentIn(name=args.name, type=args.type, price=args.price, description=args.description)


async def run(args: argparse.Namespace, client: InstrumentClient) -> Any:
    async with client:
        if args.command == "list":
            return [item.model_dump() for item in await client.list_instruments()]
        if args.command == "get":
            result = await client.get_instrument(args.id)
        elif args.command == "create":
            result = await client.create_instrument(_fields(args))
        elif args.command == "update":
            result = await client.update_instrument(args.id, _fields(args))
        else:
            result = await client.delete_instrument(args.id)
        return result.model_dump()


def main(argv: Optional[Sequence[str]] = None, client: Optional[InstrumentClient] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        configure_logging("DEBUG")
    client = client or InstrumentClient(args.base_url, timeout=args.timeout)
    try:
        output = asyncio.run(run(args, client))
    except InstrumentClientError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
