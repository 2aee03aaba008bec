from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import httpx

from ..logging_conf import get_logger

logger = get_logger("service.tgbot")


class TelegramBackupService:
    """Deliver the inbound configuration file to every panel admin over Telegram.

    Runs as a background task after the HTTP response has been sent, so every
    failure ends here: it is logged, and the next admin is still tried.
    """

    def __init__(
        self,
        *,
        token: str | None,
        admin_ids: Sequence[str],
        backup_file: Path,
        api_url: str = "https://api.telegram.org",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._token = token
        self._admin_ids = tuple(admin_ids)
        self._backup_file = Path(backup_file)
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self._token and self._admin_ids)

    def send_backup_to_admins(self) -> None:
        if not self.enabled:
            logger.warning("backup.disabled", extra={"event": "backup_disabled"})
            return

        try:
            data = self._backup_file.read_bytes()
        except OSError as e:
            logger.error(
                "backup.read_failed",
                extra={"event": "backup_read_failed", "path": str(self._backup_file), "error": str(e)},
            )
            return

        url = f"{self._api_url}/bot{self._token}/sendDocument"
        sent = 0
        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            for chat_id in self._admin_ids:
                try:
                    r = client.post(
                        url,
                        data={"chat_id": chat_id},
                        files={"document": (self._backup_file.name, data)},
                    )
                    r.raise_for_status()
                except httpx.HTTPError as e:
                    # The URL embeds the bot token; log the type only.
                    logger.warning(
                        "backup.failed",
                        extra={"event": "backup_failed", "chat_id": chat_id, "error": type(e).__name__},
                    )
                    continue
                sent += 1
                logger.info("backup.sent", extra={"event": "backup_sent", "chat_id": chat_id})

        logger.info(
            "backup.summary",
            extra={"event": "backup_summary", "admins": len(self._admin_ids), "sent": sent},
        )
