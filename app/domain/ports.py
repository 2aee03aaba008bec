"""Collaborator interfaces the HTTP layer depends on.

Concrete implementations live in `app.service`; tests inject fakes.
"""
from __future__ import annotations

from typing import Protocol

from fastapi import Request

__all__ = [
    "InboundSourceError",
    "ExpiryLookupError",
    "SessionOracle",
    "ExpiryResolver",
    "BackupService",
]


class InboundSourceError(RuntimeError):
    """Raised when the inbound configuration cannot be read or parsed.

    Distinct from "not found": the identifier may exist, the source failed.
    """


ExpiryLookupError = InboundSourceError


class SessionOracle(Protocol):
    def is_authenticated(self, request: Request) -> bool: ...


class ExpiryResolver(Protocol):
    def get_client_expiry_by_uuid(self, uuid: str) -> tuple[int, bool]:
        """Return (expiry epoch ms, found). Raise ExpiryLookupError on failure."""
        ...


class BackupService(Protocol):
    def send_backup_to_admins(self) -> None: ...
