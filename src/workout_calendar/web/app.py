"""FastAPI application for the workout-calendar API."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from .. import __version__
from ..config import Settings, get_settings
from ..db.engine import init_db
from ..log import configure_logging
from .auth import IdentityProvider, ProxyHeaderIdentityProvider
from .errors import register_error_handlers
from .routers import auth, exercises, workouts


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    # Startup: make sure the schema exists
    await init_db(app.state.settings.db_path)
    yield


def create_app(
    settings: Settings | None = None,
    identity_provider: IdentityProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="workout-calendar",
        description="Schedule workouts, log sets and pace rest periods",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.identity_provider = identity_provider or ProxyHeaderIdentityProvider(settings)

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age,
        same_site="lax",
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(auth.router)
    app.include_router(workouts.router)
    app.include_router(exercises.router)

    @app.get("/api/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
