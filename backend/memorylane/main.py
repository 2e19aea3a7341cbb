"""MemoryLane FastAPI Application.

Main entry point for the backend API server.

Configuration (environment or ``.env``):
- EVENT_CACHE_CAPACITY: LRU capacity for event records (default 50)
- LAYOUT_TARGET_ROW_HEIGHT: default target row height for layouts (default 250)
- CORS_ORIGINS: comma separated list of allowed frontend origins
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from memorylane.api import router
from memorylane.models import ErrorCode
from memorylane.services import EventService, InMemoryEventStore, LRUCacheService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def build_event_service() -> EventService:
    """Build the serving component from environment configuration."""
    capacity = int(os.getenv("EVENT_CACHE_CAPACITY", "50"))
    target_row_height = float(os.getenv("LAYOUT_TARGET_ROW_HEIGHT", "250"))
    logger.info(f"Event cache capacity={capacity}, target row height={target_row_height}")
    return EventService(
        store=InMemoryEventStore(),
        cache=LRUCacheService(capacity=capacity),
        target_row_height=target_row_height,
    )


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS")
    if not raw:
        return DEFAULT_CORS_ORIGINS
    return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]


def create_app(service: Optional[EventService] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        service: Serving component to use. Built from the environment when
            omitted; tests pass one with a small cache.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        app.state.event_service = service or build_event_service()
        yield
        # Shutdown - in-memory state is simply dropped

    app = FastAPI(
        title="MemoryLane API",
        description="Photo memory pages with cached reads, ranked search and justified layouts",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handlers
    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError):
        """Handle Pydantic validation errors."""
        return JSONResponse(
            status_code=422,
            content={
                "success": False,
                "error": {
                    "code": ErrorCode.VALIDATION_ERROR.value,
                    "message": str(exc),
                    "user_message": "Invalid request format. Please check your input.",
                },
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors."""
        logger.exception("Unhandled error")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": {
                    "code": ErrorCode.API_ERROR.value,
                    "message": str(exc),
                    "user_message": "Something went wrong. Please try again.",
                },
            },
        )

    # Include API routes
    app.include_router(router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
