from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from houseguide.classification.router import router as classification_router
from houseguide.config import settings
from houseguide.database import engine, init_models
from houseguide.middleware.error_handler import ErrorHandlerMiddleware
from houseguide.middleware.logging import RequestLoggingMiddleware
from houseguide.reports.router import router as reports_router

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.PrintLoggerFactory(),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info("app_started", ai_provider=settings.AI_PROVIDER)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="HouseGuide Case Management Service",
        version="0.1.0",
        docs_url="/docs",
        lifespan=lifespan,
    )

    cors_origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    app.include_router(classification_router, prefix="/api/v1")
    app.include_router(reports_router, prefix="/api/v1")

    @app.get("/health")
    async def health():
        return {"status": "ok", "ai_provider": settings.AI_PROVIDER}

    return app


app = create_app()
