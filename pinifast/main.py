"""FastAPI application — main entry point."""

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
from fastapi import FastAPI

from pinifast.config import get_settings, validate_settings
from pinifast.core.exceptions import register_exception_handlers
from pinifast.core.logging import configure_logging
from pinifast.core.middleware import setup_middleware
from pinifast.infrastructure.database import SessionLocal, init_db
from pinifast.interfaces.api.auth import router as auth_router
from pinifast.interfaces.api.files import router as files_router
from pinifast.interfaces.api.products import router as products_router
from pinifast.interfaces.api.roles import router as roles_router
from pinifast.interfaces.api.users import router as users_router
from pinifast.interfaces.deps import get_bootstrap_service

logger = structlog.get_logger(__name__)

_started_at = time.monotonic()


def run_bootstrap() -> None:
    """Create tables and seed roles plus the optional admin account."""
    init_db()
    db = SessionLocal()
    try:
        get_bootstrap_service(db).initialize()
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    settings = get_settings()
    configure_logging()
    validate_settings(settings)

    logger.info("Starting pinifast", env=settings.ENVIRONMENT, port=settings.PORT)
    run_bootstrap()

    yield

    logger.info("pinifast stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="pinifast",
        description="Users, roles, JWT auth, product catalog and file storage",
        version="1.0.0",
        lifespan=lifespan,
    )

    setup_middleware(app)
    register_exception_handlers(app)

    # users_router keeps /api/users/me/profile ahead of /api/users/{user_id}
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(roles_router)
    app.include_router(products_router)
    app.include_router(files_router)

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - _started_at, 3),
        }

    return app


app = create_app()
