#!/usr/bin/env python3
"""Probe a running panel API.

Steps:
- wait for server health
- look up one client's expiry through the public endpoint
- confirm a session-gated route answers like a missing page
- emit a compact summary and exit code
"""
from __future__ import annotations

import asyncio
import sys

from app.logging_conf import get_logger, setup_logging
from runner.cli import parse_args
from runner.client import fetch_expiry, fetch_gated, wait_for_health
from runner.utils import check_expiry, check_gate, summarize

setup_logging()
logger = get_logger("runner")


async def run_probe(*, base_url: str, base_path: str, uuid: str, timeout_s: float = 20.0) -> int:
    base_path = base_path.rstrip("/")
    await wait_for_health(base_url, timeout_s)

    status_code, body = await fetch_expiry(base_url, base_path, uuid)
    gated = await fetch_gated(base_url, base_path)

    results = [
        check_expiry(status_code, body, uuid),
        check_gate(gated.status_code, gated.content),
    ]
    summary, exit_code = summarize(results)
    logger.info("runner.summary", extra=summary)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv or sys.argv[1:])
    code = asyncio.run(
        run_probe(
            base_url=args.base_url,
            base_path=args.base_path,
            uuid=args.uuid,
            timeout_s=args.timeout,
        )
    )
    raise SystemExit(code)


if __name__ == "__main__":
    main()
