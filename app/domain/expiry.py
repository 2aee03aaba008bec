from __future__ import annotations

from typing import Any

__all__ = [
    "DAY_MS",
    "resolve_client_id",
    "days_remaining",
    "expiry_date",
    "summarize_expiry",
]

DAY_MS = 86_400_000


def resolve_client_id(path_value: str | None, query_value: str | None) -> str:
    """Pick the client identifier from the path, falling back to the query.

    Both inputs are trimmed. Returns "" when neither carries a value.
    """
    uuid = (path_value or "").strip()
    if not uuid:
        uuid = (query_value or "").strip()
    return uuid


def days_remaining(remaining_ms: int) -> int:
    """Whole days left, rounded up. Negative once the instant has passed."""
    return -(-remaining_ms // DAY_MS)


def _civil_from_days(days: int) -> tuple[int, int, int]:
    """Proleptic Gregorian (year, month, day) for a count of days since 1970-01-01.

    Pure integer arithmetic over 400-year eras, so years past 9999 work too.
    """
    z = days + 719_468
    era = z // 146_097
    doe = z - era * 146_097
    yoe = (doe - doe // 1460 + doe // 36_524 - doe // 146_096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def expiry_date(expiry_ms: int) -> str:
    """UTC calendar date (YYYY-MM-DD) of an epoch-milliseconds instant.

    Covers the whole int64 millisecond range; years above 9999 print in full.
    """
    year, month, day = _civil_from_days(expiry_ms // DAY_MS)
    return f"{year:04d}-{month:02d}-{day:02d}"


def summarize_expiry(*, uuid: str, expiry_ms: int, now_ms: int) -> dict[str, Any]:
    """Build the public expiry view for one client.

    An `expiry_ms` of zero or less means no expiry is configured: the client
    never expires and only `expired=False` is reported alongside the raw value.
    """
    out: dict[str, Any] = {"uuid": uuid, "expiryTime": expiry_ms}
    if expiry_ms > 0:
        remaining = expiry_ms - now_ms
        out["expiryDate"] = expiry_date(expiry_ms)
        out["daysRemaining"] = days_remaining(remaining)
        out["expired"] = remaining <= 0
    else:
        out["expired"] = False
    return out
