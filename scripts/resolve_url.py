#!/usr/bin/env python3
"""Resolve a single URL through the headless browser and print the result."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.errors import ClientInputError
from src.resolver import RedirectResolver, ResolutionRequest, build_proxy_config


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("url", help="Absolute http(s) URL to resolve")
    parser.add_argument("--wait", type=int, default=None, help="Settle wait in ms (max 15000)")
    parser.add_argument("--timeout", type=int, default=None, help="Navigation timeout in ms")
    parser.add_argument("--proxy-host")
    parser.add_argument("--proxy-port")
    parser.add_argument("--proxy-proto", default=None)
    parser.add_argument("--proxy-user")
    parser.add_argument("--proxy-pass")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        proxy = build_proxy_config(
            args.proxy_host,
            args.proxy_port,
            scheme=args.proxy_proto,
            username=args.proxy_user,
            password=args.proxy_pass,
        )
        resolver = RedirectResolver(headless=not args.headed)
        result = await resolver.resolve(
            ResolutionRequest(url=args.url, proxy=proxy, wait_ms=args.wait, timeout_ms=args.timeout)
        )
    except ClientInputError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
