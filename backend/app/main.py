from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.change_history.router import router as change_history_router
from app.compliance.router import router as compliance_router
from app.config import settings
from app.database import engine
from app.middleware.error_handler import ErrorHandlerMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.models.base import Base
from app.operating_systems.router import router as operating_systems_router
from app.servers.router import router as servers_router

structlog.configure(
    processors=[
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
    if settings.AUTO_CREATE_TABLES:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("tables_ready", database=engine.url.render_as_string(hide_password=True))
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Infrastructure Dashboard",
        version="0.1.0",
        docs_url="/docs",
        lifespan=lifespan,
    )

    cors_origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    app.include_router(operating_systems_router, prefix="/api/v1")
    # Static /servers/... routes go ahead of /servers/{server_id}
    app.include_router(compliance_router, prefix="/api/v1")
    app.include_router(change_history_router, prefix="/api/v1")
    app.include_router(servers_router, prefix="/api/v1")

    @app.get("/health")
    async def health():
        return {"status": "healthy", "service": settings.SERVICE_NAME}

    return app


app = create_app()
