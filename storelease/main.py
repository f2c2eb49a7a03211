"""
Main FastAPI application entry point.
"""

import logging
import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from storelease.clients.kakao import KakaoClient
from storelease.clients.sms import SmsClient
from storelease.clients.storage import StorageClient
from storelease.database import build_engine, build_session_factory, init_db
from storelease.errors import (
    AppError,
    app_error_handler,
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from storelease.routers import (
    auth_routes,
    consultation_routes,
    listing_routes,
    upload_routes,
    user_routes,
    verification_routes,
)
from storelease.settings import Settings, load_settings
from storelease.vars import API_PREFIX

logger = logging.getLogger("storelease")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception:
            duration = time.time() - start_time
            logger.error(
                "%s %s - ERROR - Duration: %.3fs",
                request.method,
                request.url.path,
                duration,
            )
            raise

        duration = time.time() - start_time
        logger.info(
            "%s %s - Status: %d - Duration: %.3fs",
            request.method,
            request.url.path,
            response.status_code,
            duration,
        )
        response.headers["X-Process-Time"] = str(duration)
        return response


def create_app(
    settings: Settings | None = None,
    engine: Engine | None = None,
    storage: StorageClient | None = None,
    sms: SmsClient | None = None,
    kakao: KakaoClient | None = None,
) -> FastAPI:
    """
    Build the application. Anything not passed in is constructed from
    settings, which themselves default to the environment.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    engine = engine or build_engine(settings.db_url, settings.sql_echo)
    init_db(engine)

    app = FastAPI(
        title="Storelease API",
        description="Commercial lease listings, likes, consultations and uploads.",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.storage = storage or StorageClient.from_settings(settings)
    app.state.sms = sms or SmsClient.from_settings(settings)
    app.state.kakao = kakao or KakaoClient.from_settings(settings)

    # Include routers
    for module in (
        auth_routes,
        listing_routes,
        user_routes,
        consultation_routes,
        verification_routes,
        upload_routes,
    ):
        app.include_router(module.router, prefix=API_PREFIX)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.web_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        """
        Root endpoint providing a welcome message.
        """
        return {"message": "Welcome to the Storelease API"}

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    return app


def run() -> None:
    settings = load_settings()
    uvicorn.run(
        "storelease.main:create_app", factory=True, host="0.0.0.0", port=settings.port
    )
