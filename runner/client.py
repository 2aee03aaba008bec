from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx

from app.logging_conf import get_logger
from runner.types import ProbeError, RequestFailedError

logger = get_logger("runner.client")


async def wait_for_health(base_url: str, timeout_s: float = 20.0) -> None:
    """Ping /health until it returns ok or raise after a timeout."""
    deadline = time.monotonic() + timeout_s
    async with httpx.AsyncClient(base_url=base_url, timeout=5.0) as client:
        while time.monotonic() < deadline:
            try:
                r = await client.get("/health")
                if r.status_code == 200 and r.json().get("ok") is True:
                    logger.info("health.ok", extra={"event": "health_ok"})
                    return
            except (httpx.HTTPError, ValueError):
                pass
            await asyncio.sleep(0.25)
    raise ProbeError("Health check did not pass within timeout")


async def _get(base_url: str, path: str, *, params: dict | None = None, retries: int = 3) -> httpx.Response:
    """GET with a few retries on transport errors; any HTTP status is returned as is."""
    last_err: Exception | None = None
    for attempt in range(retries):
        try:
            async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
                return await client.get(path, params=params)
        except httpx.TransportError as e:  # pragma: no cover - network flakiness
            last_err = e
            logger.warning(
                "probe.retry",
                extra={
                    "event": "probe_retry",
                    "path": path,
                    "attempt": attempt + 1,
                    "error": str(e),
                },
            )
    raise RequestFailedError(str(last_err) if last_err else f"GET {path} failed")


async def fetch_expiry(base_url: str, base_path: str, uuid: str) -> tuple[int, dict[str, Any]]:
    """Look up a client's expiry through the public endpoint."""
    r = await _get(base_url, f"{base_path}/panel/api/public/client-expiry", params={"uuid": uuid})
    try:
        body = r.json()
    except ValueError:
        body = {}
    return r.status_code, body


async def fetch_gated(base_url: str, base_path: str) -> httpx.Response:
    """Hit a session-gated route without any cookie."""
    return await _get(base_url, f"{base_path}/panel/api/backuptotgbot")
