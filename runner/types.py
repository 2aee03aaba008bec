from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CheckResult:
    """Outcome of one probe against a running panel."""

    name: str
    ok: bool
    status_code: int | None = None
    detail: str = ""


class ProbeError(RuntimeError):
    """Raised when the probe cannot proceed (e.g., health never ready)."""


class RequestFailedError(ProbeError):
    """Raised when a probe request keeps failing after retries."""
