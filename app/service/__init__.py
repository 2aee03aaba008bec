"""Default collaborator implementations wired by `app.main.create_app`."""
from .inbound_service import InboundStore
from .session import CookieSessionOracle
from .tgbot import TelegramBackupService

__all__ = ["InboundStore", "CookieSessionOracle", "TelegramBackupService"]
