from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reserveflow.api.error_handling import register_exception_handlers
from reserveflow.api.middleware.access_log import AccessLogMiddleware
from reserveflow.api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from reserveflow.api.routes.availability import router as availability_router
from reserveflow.api.routes.config import router as config_router
from reserveflow.api.routes.health import router as health_router
from reserveflow.api.routes.metrics import router as metrics_router
from reserveflow.api.routes.reservations import router as reservations_router
from reserveflow.api.routes.tables import router as tables_router
from reserveflow.infrastructure.observability.logging_config import configure_logging
from reserveflow.infrastructure.observability.otel import configure_otel


_OPEN_CORS_ENVS = frozenset({"dev", "test"})


def _cors_allow_origins() -> list[str]:
    if os.getenv("APP_ENV", "dev").lower() in _OPEN_CORS_ENVS:
        return ["*"]
    allowlist = os.getenv("CORS_ALLOW_ORIGINS", "").split(",")
    return [origin.strip() for origin in allowlist if origin.strip()]


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="ReserveFlow", version="0.1.0")
    register_exception_handlers(app)
    for router in (
        health_router,
        metrics_router,
        config_router,
        availability_router,
        tables_router,
        reservations_router,
    ):
        app.include_router(router)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    configure_otel(app)
    return app


app = create_app()
