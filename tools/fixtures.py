#!/usr/bin/env python3
"""Write a sample inbound configuration for local runs of the panel API.

Usage: python tools/fixtures.py [path]   (default: ./inbounds.json)
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
DAY_MS = 86_400_000


def build_inbounds(now_ms: int) -> dict:
    """Three clients: one active, one expired, one without expiry."""
    vless_clients = [
        {
            "id": "3f1c6c1e-8a4b-4d55-9a10-0c8f2b6e7a11",
            "email": "active@example",
            "expiryTime": now_ms + 30 * DAY_MS,
        },
        {
            "id": "b2d7e9a0-51c3-4f7e-8d2b-6a9f0e4c1d22",
            "email": "expired@example",
            "expiryTime": now_ms - 2 * DAY_MS,
        },
    ]
    vmess_clients = [
        {"id": "c9e4a1b7-2f60-4b38-a5d1-7e3f8c0b9d33", "email": "forever@example", "expiryTime": 0},
    ]
    return {
        "inbounds": [
            {
                "id": 1,
                "remark": "vless-main",
                "protocol": "vless",
                "port": 443,
                "enable": True,
                "settings": {"clients": vless_clients},
            },
            {
                "id": 2,
                "remark": "vmess-legacy",
                "protocol": "vmess",
                "port": 8443,
                "enable": False,
                # Stored as a JSON string, the way the panel database keeps it.
                "settings": json.dumps({"clients": vmess_clients}),
            },
        ]
    }


def main(argv: list[str]) -> None:
    out = Path(argv[0]) if argv else ROOT / "inbounds.json"
    out.parent.mkdir(parents=True, exist_ok=True)
    doc = build_inbounds(int(time.time() * 1000))
    out.write_text(json.dumps(doc, indent=2) + "\n", encoding="utf-8")
    clients = sum(
        len(ib["settings"]["clients"] if isinstance(ib["settings"], dict) else json.loads(ib["settings"])["clients"])
        for ib in doc["inbounds"]
    )
    print(f"Wrote {out} ({len(doc['inbounds'])} inbounds, {clients} clients)")


if __name__ == "__main__":
    main(sys.argv[1:])
