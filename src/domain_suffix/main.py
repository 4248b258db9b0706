from __future__ import annotations

import argparse
import asyncio
import json
import sys

import structlog

from .logging_config import setup_logging
from .validator import try_parse, update_online_source_async

log = structlog.get_logger()


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="domain-suffix",
        description="Split hosts into subdomain, registrable domain and public suffix.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    parse_cmd = sub.add_parser("parse", help="Parse one or more hosts")
    parse_cmd.add_argument("hosts", nargs="+", metavar="HOST")

    update_cmd = sub.add_parser("update", help="Download the public suffix list and reload")
    update_cmd.add_argument("--url", default=None, help="Override the list URL")
    return parser


def parse_hosts(hosts: list[str]) -> int:
    all_valid = True
    for host in hosts:
        parsed = try_parse(host)
        record: dict = {"source": host, "valid": parsed is not None}
        if parsed is None:
            all_valid = False
        else:
            record.update(parsed.model_dump())
        print(json.dumps(record))
    return 0 if all_valid else 1


async def update(url: str | None) -> int:
    result = await update_online_source_async(url=url)
    log.info("update_complete", **result.model_dump())
    return 0 if result else 1


def main(argv: list[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    setup_logging()

    if args.command == "parse":
        return parse_hosts(args.hosts)
    return asyncio.run(update(args.url))


if __name__ == "__main__":
    sys.exit(main())
