"""Management routes. Every route here sits behind `require_session`."""
from __future__ import annotations

import time

from fastapi import APIRouter, BackgroundTasks, Depends, Response, status

from ..domain.ports import BackupService, InboundSourceError
from ..logging_conf import get_logger
from .deps import Collaborators, get_collaborators, require_session
from .models import InboundView, Msg, ServerStatus
from .responses import json_msg

logger = get_logger("api.panel")

router = APIRouter(dependencies=[Depends(require_session)])
inbounds = APIRouter(prefix="/inbounds", tags=["inbounds"])
server = APIRouter(prefix="/server", tags=["server"])


def _run_backup(service: BackupService) -> None:
    # Runs after the response is sent; nothing here can reach the caller.
    try:
        service.send_backup_to_admins()
    except Exception:
        logger.exception("backup.error", extra={"event": "backup_error"})


@router.get("/backuptotgbot", summary="Send a panel backup to the bot admins")
def backup_to_tgbot(
    background_tasks: BackgroundTasks,
    deps: Collaborators = Depends(get_collaborators),
) -> Response:
    background_tasks.add_task(_run_backup, deps.backup_service)
    return Response(status_code=status.HTTP_200_OK)


@inbounds.get("/list", response_model=Msg, summary="List inbounds (read-only)")
def list_inbounds(deps: Collaborators = Depends(get_collaborators)):
    try:
        rows = deps.inbound_store.list_inbounds()
    except InboundSourceError:
        logger.exception("inbounds.list_failed", extra={"event": "inbounds_list_failed"})
        return json_msg(status.HTTP_500_INTERNAL_SERVER_ERROR, False, "failed to load inbounds")
    items = [InboundView(**row).model_dump() for row in rows]
    return Msg(success=True, obj=items)


@server.get("/status", response_model=Msg, summary="Panel process status")
def server_status(deps: Collaborators = Depends(get_collaborators)) -> Msg:
    out = ServerStatus(
        version=deps.version,
        uptimeSeconds=int(time.monotonic() - deps.started_at),
        now=deps.clock(),
    )
    return Msg(success=True, obj=out.model_dump())


router.include_router(inbounds)
router.include_router(server)
