"""FastAPI application entry point."""

import logging
import os
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from micro_tutor.api.routes import router
from micro_tutor.config import Settings, get_settings
from micro_tutor.content.resolver import ContentResolver
from micro_tutor.reminders import ReminderScheduler
from micro_tutor.storage.accounts import AccountStore, SessionRegistry
from micro_tutor.storage.progress import ProgressStore

# Configure structlog based on environment
is_production = os.getenv("ENV", "development").lower() == "production"

if is_production:
    # Production: JSON format for machine parsing
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
else:
    # Development: console format for human readability
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

logger = structlog.get_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with its stores attached to ``app.state``."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.generation_enabled:
            logger.warning(
                "using_fallback_content",
                hint="Add HUGGINGFACE_API_KEY to .env for generated content",
            )
        yield
        await app.state.reminders.shutdown()

    app = FastAPI(title="Micro Tutor", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.resolver = ContentResolver.from_settings(settings)
    app.state.accounts = AccountStore(settings.data_dir)
    app.state.sessions = SessionRegistry()
    app.state.progress = ProgressStore(settings.progress_dir)
    app.state.reminders = ReminderScheduler()

    _allowed_origins_env = os.getenv(
        "ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in _allowed_origins_env.split(",")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)

    @app.middleware("http")
    async def auth_middleware(request: Request, call_next):
        """Optional APP_SECRET check for API routes."""
        if not settings.app_secret or not request.url.path.startswith("/api"):
            return await call_next(request)
        if request.url.path == "/api/health":
            return await call_next(request)
        if request.headers.get("X-App-Secret", "") != settings.app_secret:
            return JSONResponse({"error": "Unauthorized"}, status_code=401)
        return await call_next(request)

    # Mount frontend static files (must be after API routes)
    if settings.frontend_dir.is_dir():
        app.mount(
            "/", StaticFiles(directory=str(settings.frontend_dir), html=True), name="frontend"
        )

    return app


def main() -> None:
    """Run the application."""
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
