from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..domain.ports import InboundSourceError
from ..logging_conf import get_logger

logger = get_logger("service.inbound")


def _client_list(inbound: dict[str, Any]) -> list[dict[str, Any]]:
    """Return the clients of one inbound.

    Panels persist `settings` either as an object or as a JSON-encoded string.
    """
    settings = inbound.get("settings") or {}
    if isinstance(settings, str):
        settings = json.loads(settings) if settings.strip() else {}
    if not isinstance(settings, dict):
        raise ValueError("inbound settings must be an object")
    clients = settings.get("clients") or []
    if not isinstance(clients, list):
        raise ValueError("inbound clients must be a list")
    return [c for c in clients if isinstance(c, dict)]


class InboundStore:
    """Read-only view over the panel's inbound configuration file.

    The file is re-read on every call so edits made by the panel are picked up
    without a restart; nothing is cached between requests.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _load(self) -> list[dict[str, Any]]:
        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise InboundSourceError(f"cannot read inbounds from {self.path}") from e

        inbounds = doc.get("inbounds") if isinstance(doc, dict) else None
        if not isinstance(inbounds, list):
            raise InboundSourceError(f"{self.path} has no inbounds list")
        return [ib for ib in inbounds if isinstance(ib, dict)]

    def get_client_expiry_by_uuid(self, uuid: str) -> tuple[int, bool]:
        """Return (expiryTime in epoch ms, found) for the first client with this id."""
        for inbound in self._load():
            try:
                clients = _client_list(inbound)
            except ValueError as e:
                raise InboundSourceError(
                    f"inbound {inbound.get('id')} has malformed settings"
                ) from e
            for client in clients:
                if client.get("id") != uuid:
                    continue
                raw = client.get("expiryTime") or 0
                try:
                    return int(raw), True
                except (TypeError, ValueError, OverflowError) as e:
                    raise InboundSourceError("client expiryTime is not an integer") from e
        return 0, False

    def list_inbounds(self) -> list[dict[str, Any]]:
        """Project every inbound to the fields the panel list view shows."""
        out: list[dict[str, Any]] = []
        for inbound in self._load():
            try:
                client_count = len(_client_list(inbound))
            except ValueError:
                logger.warning(
                    "inbound.malformed_settings",
                    extra={"event": "inbound_malformed_settings", "inbound_id": inbound.get("id")},
                )
                client_count = 0
            out.append(
                {
                    "id": inbound.get("id"),
                    "remark": inbound.get("remark", ""),
                    "protocol": inbound.get("protocol", ""),
                    "port": inbound.get("port"),
                    "enable": bool(inbound.get("enable", True)),
                    "clientCount": client_count,
                }
            )
        return out
