from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class Msg(BaseModel):
    """Generic result envelope used for errors and plain panel results."""
    success: bool
    msg: str = ""
    obj: Optional[Any] = None


class ExpirySummary(BaseModel):
    """Public expiry view of one client.

    `expiryDate` and `daysRemaining` are only present when an expiry is set.
    """
    uuid: str
    expiryTime: int
    expiryDate: Optional[str] = None
    daysRemaining: Optional[int] = None
    expired: bool


class InboundView(BaseModel):
    """Row of the panel inbound list."""
    id: Optional[int] = None
    remark: str = ""
    protocol: str = ""
    port: Optional[int] = None
    enable: bool = True
    clientCount: int = 0


class ServerStatus(BaseModel):
    version: str
    uptimeSeconds: int
    now: int
