"""FastAPI app factory: request logging, health, and the panel route table."""
from __future__ import annotations

import time
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, Response, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import panel_router, public_router
from app.api.deps import Collaborators, now_ms
from app.config import Settings
from app.domain.ports import BackupService, ExpiryResolver, SessionOracle
from app.logging_conf import get_logger, setup_logging
from app.service import CookieSessionOracle, InboundStore, TelegramBackupService

logger = get_logger("app")


def create_app(
    settings: Settings | None = None,
    *,
    session_oracle: SessionOracle | None = None,
    expiry_resolver: ExpiryResolver | None = None,
    backup_service: BackupService | None = None,
    inbound_store: InboundStore | None = None,
    clock: Callable[[], int] = now_ms,
) -> FastAPI:
    """Build the application.

    Collaborators not passed in are built from `settings`; tests inject fakes.
    """
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    store = inbound_store or InboundStore(settings.inbounds_file)
    collaborators = Collaborators(
        session_oracle=session_oracle
        or CookieSessionOracle(cookie_name=settings.session_cookie, token=settings.session_token),
        expiry_resolver=expiry_resolver or store,
        backup_service=backup_service
        or TelegramBackupService(
            token=settings.tgbot_token,
            admin_ids=settings.tgbot_admin_ids,
            backup_file=settings.inbounds_file,
            api_url=settings.tgbot_api_url,
            timeout=settings.tgbot_timeout,
        ),
        inbound_store=store,
        version=settings.version,
        clock=clock,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "startup",
            extra={"event": "startup", "version": settings.version, "base_path": settings.base_path},
        )
        yield
        logger.info("shutdown", extra={"event": "shutdown"})

    # No trailing-slash redirects: a 307 would reveal that a gated route exists.
    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.collaborators = collaborators

    @app.middleware("http")
    async def request_logger(request: Request, call_next: Callable[[Request], Response]):
        """JSON request logging with a correlation id.

        Reuses an incoming X-Request-ID or mints one, and echoes it back.
        """
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        request.state.request_id = request_id

        start = time.perf_counter()
        logger.info(
            "request.start",
            extra={
                "event": "request_start",
                "method": request.method,
                "path": request.url.path,
                "request_id": request_id,
            },
        )
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={
                    "event": "request_error",
                    "path": request.url.path,
                    "method": request.method,
                    "request_id": request_id,
                },
            )
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                "request_id": request_id,
            },
        )
        return response

    @app.exception_handler(StarletteHTTPException)
    async def not_found_is_blank(request: Request, exc: StarletteHTTPException) -> Response:
        # Unknown paths, wrong methods and gated paths must look the same from outside.
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        return await http_exception_handler(request, exc)

    @app.get("/health", summary="Liveness/readiness check")
    async def health() -> JSONResponse:
        return JSONResponse(content={"ok": True})

    # Route table: public lookups first, then everything behind the session gate.
    api_prefix = f"{settings.base_path}/panel/api"
    app.include_router(public_router, prefix=f"{api_prefix}/public", tags=["public"])
    app.include_router(panel_router, prefix=api_prefix, tags=["panel"])

    return app


# ASGI entrypoint for uvicorn: `uvicorn app.main:app --port 2053`
app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = Settings.from_env()
    uvicorn.run(
        "app.main:app",
        host=_settings.host,
        port=_settings.port,
        log_level=_settings.log_level.lower(),
        reload=False,
    )
