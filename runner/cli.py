from __future__ import annotations

import argparse
import os


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments for the probe runner."""
    parser = argparse.ArgumentParser(description="Panel API probe")
    parser.add_argument("--base-url", default=os.getenv("BASE_URL", "http://127.0.0.1:2053"))
    parser.add_argument("--base-path", default=os.getenv("PANEL_BASE_PATH", ""))
    parser.add_argument("--uuid", required=True, help="Client identifier to look up")
    parser.add_argument("--timeout", type=float, default=20.0, help="Seconds to wait for /health")
    return parser.parse_args(argv)
