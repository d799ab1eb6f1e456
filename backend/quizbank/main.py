"""FastAPI application factory and main entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException

from quizbank import __version__
from quizbank.api.v1.router import api_router
from quizbank.core.app_exceptions import CriteriaValidationError, SearchFailedError
from quizbank.core.config import settings
from quizbank.core.errors import (
    criteria_validation_exception_handler,
    general_exception_handler,
    http_exception_handler,
    search_failed_exception_handler,
)
from quizbank.core.logging import setup_logging
from quizbank.db.mongo import close_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging()
    yield
    close_client()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=__version__,
        description="Question bank retrieval API",
        openapi_url="/openapi.json" if settings.ENV != "prod" else None,
        docs_url="/docs" if settings.ENV != "prod" else None,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_exception_handler(CriteriaValidationError, criteria_validation_exception_handler)
    app.add_exception_handler(SearchFailedError, search_failed_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint - API information."""
        return {
            "message": settings.PROJECT_NAME,
            "version": __version__,
            "docs_url": "/docs" if settings.ENV != "prod" else None,
        }

    return app


app = create_app()
