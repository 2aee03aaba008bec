from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from ..domain.expiry import resolve_client_id, summarize_expiry
from ..logging_conf import get_logger
from .deps import Collaborators, get_collaborators
from .models import ExpirySummary, Msg
from .responses import json_msg

router = APIRouter()
logger = get_logger("api.public")

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": Msg},
    status.HTTP_404_NOT_FOUND: {"model": Msg},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": Msg},
}


def _client_expiry(uuid: str, deps: Collaborators):
    if not uuid:
        return json_msg(status.HTTP_400_BAD_REQUEST, False, "uuid is required")

    try:
        expiry_ms, found = deps.expiry_resolver.get_client_expiry_by_uuid(uuid)
    except Exception:
        # Any resolver failure maps to one generic answer; detail stays in the log.
        logger.exception(
            "expiry.lookup_failed",
            extra={"event": "expiry_lookup_failed", "uuid": uuid},
        )
        return json_msg(
            status.HTTP_500_INTERNAL_SERVER_ERROR, False, "failed to query expiry time"
        )
    if not found:
        return json_msg(status.HTTP_404_NOT_FOUND, False, "uuid not found")

    out = summarize_expiry(uuid=uuid, expiry_ms=expiry_ms, now_ms=deps.clock())
    logger.info(
        "expiry.lookup",
        extra={"event": "expiry_lookup", "uuid": uuid, "expired": out["expired"]},
    )
    return ExpirySummary(**out)


@router.get(
    "/client-expiry",
    response_model=ExpirySummary,
    response_model_exclude_none=True,
    responses=_ERRORS,
    summary="Client expiry by ?uuid= (public, read-only)",
)
def client_expiry_by_query(
    uuid: str = Query("", description="Client identifier"),
    deps: Collaborators = Depends(get_collaborators),
):
    """Report when a client's access expires."""
    return _client_expiry(resolve_client_id(None, uuid), deps)


@router.get(
    "/client-expiry/{client_id}",
    response_model=ExpirySummary,
    response_model_exclude_none=True,
    responses=_ERRORS,
    summary="Client expiry by path (public, read-only)",
)
def client_expiry_by_path(
    client_id: str,
    uuid: str = Query("", description="Used when the path segment is blank"),
    deps: Collaborators = Depends(get_collaborators),
):
    """Same as the query form; the path segment wins when it is not blank."""
    return _client_expiry(resolve_client_id(client_id, uuid), deps)
