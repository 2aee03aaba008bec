from __future__ import annotations

from typing import Any

from runner.types import CheckResult

_SUMMARY_KEYS = {"uuid", "expiryTime", "expired"}


def check_expiry(status_code: int, body: dict[str, Any], uuid: str) -> CheckResult:
    """Validate the shape of an expiry lookup response."""
    name = "expiry"
    if status_code == 404:
        ok = body.get("success") is False and body.get("msg") == "uuid not found"
        return CheckResult(name, ok, status_code, "" if ok else "unexpected 404 body")
    if status_code != 200:
        return CheckResult(name, False, status_code, str(body.get("msg", "")))

    missing = _SUMMARY_KEYS - body.keys()
    if missing:
        return CheckResult(name, False, status_code, f"missing fields: {sorted(missing)}")
    if body["uuid"] != uuid:
        return CheckResult(name, False, status_code, "uuid mismatch")
    has_date = "expiryDate" in body and "daysRemaining" in body
    if (body["expiryTime"] > 0) != has_date:
        return CheckResult(name, False, status_code, "expiryDate/daysRemaining inconsistent")
    return CheckResult(name, True, status_code)


def check_gate(status_code: int, content: bytes) -> CheckResult:
    """The gated route must look like a missing page: 404, empty body."""
    ok = status_code == 404 and not content
    return CheckResult("gate", ok, status_code, "" if ok else "gated route is visible")


def summarize(results: list[CheckResult]) -> tuple[dict, int]:
    """Compute summary dict and an exit code from check results."""
    failed = [r for r in results if not r.ok]
    summary = {
        "component": "runner",
        "event": "summary",
        "checks": len(results),
        "failed": len(failed),
        "failures": [
            {"check": r.name, "status_code": r.status_code, "detail": r.detail} for r in failed
        ],
    }
    return summary, 0 if not failed else 1
