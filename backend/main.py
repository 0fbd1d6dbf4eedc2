"""
Application entry point.
Run with:  uvicorn backend.main:app --reload

⚠️  DEVELOPMENT NOTE:
    A default admin user and the reference categories/branches are seeded on
    startup (see backend/db/seeder.py). Turn them off with SEED_ADMIN=false
    and SEED_DEFAULT_SETTINGS=false.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.core.logging_config import configure_logging
from backend.core.config import settings
from backend.core.exceptions import ValidationFailedError
from backend.api.v1.router import api_router
from backend.db.database import init_db
from backend.db.seeder import seed_admin, seed_default_settings

configure_logging()


def register_exception_handlers(app: FastAPI) -> None:
    """Map registry errors onto the documented response bodies."""
    logger = logging.getLogger(__name__)

    @app.exception_handler(ValidationFailedError)
    async def validation_failed_handler(request: Request, exc: ValidationFailedError):
        logger.warning(
            "Validation failed on %s %s fields=%s",
            request.method,
            request.url.path,
            exc.fields,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return await validation_failed_handler(
            request, ValidationFailedError.from_errors(exc.errors())
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled error during %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    logger = logging.getLogger(__name__)
    logger.info("Starting FastAPI application setup")
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=(
            "Backend API for the operational settings of a business: "
            "product categories and branches."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ── Middleware ──────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Errors / routers ────────────────────────────────────────────────────
    register_exception_handlers(app)
    app.include_router(api_router)

    # ── Startup ─────────────────────────────────────────────────────────────
    @app.on_event("startup")
    def on_startup() -> None:
        """Initialize the database and development seed data."""
        logger.info("Initializing database and seed data")
        init_db()
        if settings.SEED_ADMIN:
            seed_admin()
        if settings.SEED_DEFAULT_SETTINGS:
            seed_default_settings()

    return app


app = create_app()
