"""
FastAPI Application Entry Point

Food ordering backend: accounts, cookie sessions, orders and the
restaurant menu.

Endpoints:
    - POST /signup, POST /login, GET /logout: accounts and sessions
    - POST /make-order, GET /get-orders, PATCH /edit-order, DELETE /delete-order
    - POST /create-menu, GET /get-menu, PATCH /edit-menu, DELETE /delete-menu
    - GET /get-all-orders, GET /export: admin views of every order
    - GET /health: System health check

Version: 1.0.0
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from foodorder.auth.deps import attach_user
from foodorder.core.config import Settings, get_settings, setup_logging
from foodorder.core.errors import AppError, install_exception_handlers
from foodorder.database import Database, get_db
from foodorder.models import User
from foodorder.routes import ROUTERS
from foodorder.schemas import HealthResponse, RootResponse, UserResponse
from foodorder.services.users import UserStore

logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

async def bootstrap_admin_if_needed(database: Database, settings: Settings) -> Optional[User]:
    """
    Ensure the configured bootstrap admin exists.

    Controlled via BOOTSTRAP_ADMIN_EMAIL / BOOTSTRAP_ADMIN_PASSWORD so a
    fresh deployment has a deterministic way to reach the admin routes.
    Does nothing unless both are set.
    """
    if not settings.bootstrap_admin_email or not settings.bootstrap_admin_password:
        return None

    async with database.session() as session:
        store = UserStore(session, password_min_length=settings.password_min_length)
        try:
            admin = await store.ensure_admin(
                settings.bootstrap_admin_name,
                settings.bootstrap_admin_email,
                settings.bootstrap_admin_password,
            )
        except AppError as e:
            logger.error(f"Bootstrap admin not created: {e.message}")
            return None

    logger.info(f"Bootstrap admin ready: {admin.email}")
    return admin


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    settings: Settings = app.state.settings
    database: Database = app.state.db

    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    await database.connect()
    logger.info("✅ Database initialized")

    await bootstrap_admin_if_needed(database, settings)

    missing = settings.validate_production_config()
    if missing:
        logger.warning(f"⚠️ Missing production config: {missing}")

    logger.info("✅ Application ready!")

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    await database.dispose()
    logger.info("✅ Cleanup complete")


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around ``settings`` (cached settings by default)."""
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Food ordering backend with cookie-based sessions.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.db = Database(settings.database_url, echo=settings.database_echo)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_exception_handlers(app, debug=settings.debug)

    # =========================================================================
    # ROOT & HEALTH ENDPOINTS
    # =========================================================================

    @app.get("/", response_model=RootResponse, tags=["Root"])
    async def root(user: Optional[User] = Depends(attach_user)) -> RootResponse:
        """API root; greets the logged-in user when there is one."""
        greeting = f"Welcome back, {user.name}" if user else f"Welcome to {settings.app_name}"
        return RootResponse(
            message=greeting,
            version=settings.app_version,
            user=UserResponse.model_validate(user) if user else None,
        )

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="System Health Check",
    )
    async def health_check(db: AsyncSession = Depends(get_db)) -> HealthResponse:
        """Verify the database is reachable."""
        db_status = "healthy"
        try:
            await db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            db_status = f"unhealthy: {str(e)}"
            logger.error(f"Database health check failed: {e}")

        return HealthResponse(
            status="operational" if db_status == "healthy" else "degraded",
            database=db_status,
            timestamp=datetime.now(),
        )

    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app()


def run() -> None:
    """Serve ``app`` with uvicorn on the configured host/port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
