"""FastAPI application factory"""

import logging
import time
import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from src.api.error import register_error_handlers
from src.api.routes import entries, invoices

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if config.ENABLE_SENTRY and config.DSN_SENTRY:
        sentry_sdk.init(dsn=config.DSN_SENTRY, environment=config.SENTRY_ENVIRONMENT)

    app = FastAPI(title="Invoicing Service", version="1.0.0")

    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=config.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
            )
            return response

    register_error_handlers(app)
    app.include_router(invoices.router)
    app.include_router(entries.router)

    return app
