"""Runtime configuration loaded from environment variables."""
from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from pathlib import Path

__all__ = ["Settings"]


def _float_env(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        val = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number") from e
    if not math.isfinite(val) or val <= 0:
        raise ValueError(f"{name} must be a positive finite number")
    return val


def _int_env(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw, 10)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer") from e


def _admin_ids(raw: str) -> tuple[str, ...]:
    return tuple(tok.strip() for tok in raw.split(",") if tok.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings. Build with `Settings.from_env()` at startup."""

    app_name: str = "Panel API"
    version: str = "0.1.0"
    log_level: str = "INFO"
    base_path: str = ""
    host: str = "0.0.0.0"
    port: int = 2053

    # Session cookie checked by the auth gate
    session_cookie: str = "session"
    session_token: str | None = None

    inbounds_file: Path = Path("inbounds.json")

    # Telegram backup delivery
    tgbot_token: str | None = None
    tgbot_admin_ids: tuple[str, ...] = field(default_factory=tuple)
    tgbot_api_url: str = "https://api.telegram.org"
    tgbot_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> Settings:
        base_path = os.getenv("PANEL_BASE_PATH", "").strip().rstrip("/")
        if base_path and not base_path.startswith("/"):
            base_path = "/" + base_path
        return cls(
            version=os.getenv("APP_VERSION", "0.1.0"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            base_path=base_path,
            host=os.getenv("PANEL_HOST", "0.0.0.0"),
            port=_int_env("PANEL_PORT", "2053"),
            session_cookie=os.getenv("PANEL_SESSION_COOKIE", "session"),
            session_token=os.getenv("PANEL_SESSION_TOKEN") or None,
            inbounds_file=Path(os.getenv("PANEL_INBOUNDS_FILE", "inbounds.json")),
            tgbot_token=os.getenv("PANEL_TGBOT_TOKEN") or None,
            tgbot_admin_ids=_admin_ids(os.getenv("PANEL_TGBOT_ADMIN_IDS", "")),
            tgbot_api_url=os.getenv("PANEL_TGBOT_API_URL", "https://api.telegram.org").rstrip("/"),
            tgbot_timeout=_float_env("PANEL_TGBOT_TIMEOUT", "30"),
        )
