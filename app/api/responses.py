from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse

from .models import Msg


def json_msg(status_code: int, success: bool, msg: str, obj: Any = None) -> JSONResponse:
    """Return a `Msg` envelope with an explicit status code."""
    body = Msg(success=success, msg=msg, obj=obj)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))
