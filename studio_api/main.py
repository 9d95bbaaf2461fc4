"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from studio_api.api import (
    auth,
    blog,
    blog_comments,
    blog_images,
    blog_tags,
    newsletter,
    registrations,
    submissions,
)
from studio_api.config import Settings, get_settings
from studio_api.database import Database
from studio_api.errors import AppError, UpstreamTimeout, ValidationError, is_timeout
from studio_api.services.rate_limit import RateLimiter
from studio_api.static import API_NOT_FOUND, is_api_path, mount_frontend
from studio_api.validation import describe_errors

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

DEV_ORIGINS = [
    "http://localhost:5000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def configure_logging(settings: Settings) -> None:
    """Install the root handler once."""
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect, migrate and tidy the session table before serving."""
    settings: Settings = app.state.settings
    database: Database = app.state.database

    try:
        database.check_connection()
    except SQLAlchemyError:
        logger.critical("Could not connect to the database, refusing to start", exc_info=True)
        raise

    if settings.run_migrations_on_startup:
        database.run_migrations()
    database.prune_expired_sessions()

    yield

    database.dispose()


def error_response(error: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code, content=error.to_dict(), headers=error.headers()
    )


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Normalize every failure into a JSON body with a stable ``message``."""

    def internal_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        content = {"message": "Internal Server Error"}
        if not settings.is_production:
            content["error"] = type(exc).__name__
            content["detail"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                f"{type(exc).__name__} on {request.method} {request.url.path}",
                exc_info=exc.__cause__ or exc,
            )
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return error_response(ValidationError(describe_errors(exc.errors())))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        message = str(exc.detail)
        if exc.status_code == 404 and is_api_path(request.url.path):
            message = API_NOT_FOUND
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        if is_timeout(exc):
            logger.error(f"Database timeout on {request.method} {request.url.path}", exc_info=exc)
            return error_response(UpstreamTimeout())
        return internal_error(request, exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        return internal_error(request, exc)


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the application with its own database handle and rate limiter."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Studio Site API",
        description="Accounts, lead capture and blog for the studio website",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.database = database or Database(settings)
    app.state.rate_limiter = RateLimiter(settings)

    register_exception_handlers(app, settings)

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        if is_api_path(request.url.path):
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.info(
                f"{request.method} {request.url.path} {response.status_code} in {duration_ms}ms"
            )
        return response

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    origins = list(settings.frontend_origins)
    if settings.is_development:
        origins += DEV_ORIGINS
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    # Register routers. Fixed /api/blog/<name> routes go before the post-by-slug route.
    app.include_router(auth.router)
    app.include_router(registrations.router)
    app.include_router(submissions.router)
    app.include_router(newsletter.router)
    app.include_router(blog_tags.router)
    app.include_router(blog_images.router)
    app.include_router(blog_comments.router)
    app.include_router(blog.router)

    if settings.static_dir:
        mount_frontend(app, settings.static_dir)

    return app


app = create_app()
