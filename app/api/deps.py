"""Request-scoped access to collaborators, and the auth gate."""
from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from fastapi import Depends, HTTPException, Request, status

from ..domain.ports import BackupService, ExpiryResolver, SessionOracle
from ..logging_conf import get_logger
from ..service.inbound_service import InboundStore

logger = get_logger("api.auth")


def now_ms() -> int:
    """Return current time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Collaborators:
    """Everything the handlers talk to, built once in `create_app`."""

    session_oracle: SessionOracle
    expiry_resolver: ExpiryResolver
    backup_service: BackupService
    inbound_store: InboundStore
    version: str = "0.1.0"
    clock: Callable[[], int] = now_ms
    started_at: float = field(default_factory=time.monotonic)


def get_collaborators(request: Request) -> Collaborators:
    return request.app.state.collaborators


def require_session(
    request: Request, deps: Collaborators = Depends(get_collaborators)
) -> None:
    """Hide protected routes from callers without a session.

    Answers 404 rather than 401/403 so an unauthenticated caller cannot tell a
    protected route from a path that does not exist.
    """
    if not deps.session_oracle.is_authenticated(request):
        logger.debug(
            "auth.denied",
            extra={"event": "auth_denied", "path": request.url.path},
        )
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
