"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from movieseat.api.v1.router import router as v1_router
from movieseat.config import Settings, get_settings
from movieseat.errors import BookingError
from movieseat.services.booking_service import BookingService
from movieseat.storage import create_store

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    app_settings: Settings = app.state.settings
    logger.info(f"Starting {app_settings.APP_NAME}...")

    # A service injected by the caller is used as is
    store = None
    if getattr(app.state, "booking_service", None) is None:
        store = await create_store(app_settings)
        await store.seed_if_empty()
        service = await BookingService.load(store, app_settings.LOCK_SCOPE)
        if app_settings.RECONCILE_ON_STARTUP:
            await service.reconcile()
        app.state.booking_service = service

    yield

    logger.info(f"Shutting down {app_settings.APP_NAME}...")
    if store is not None:
        await store.close()


def create_app(
    app_settings: Settings | None = None,
    booking_service: BookingService | None = None,
) -> FastAPI:
    """Create and configure FastAPI application."""
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.APP_NAME,
        version=app_settings.APP_VERSION,
        description="""
## MovieSeat API

Seat inventory and bookings for scheduled showings.

- **No double booking**: each showing's seats are checked and booked under one lock
- **All-or-nothing bookings**: a conflict leaves every seat untouched
- **Cancellation** releases the booking's seats immediately
- **Pluggable storage**: JSON files, Redis or a SQL database

### Workflow
1. Browse programs and showings
2. Inspect a showing's seats
3. Create a booking for available seats
4. Cancel the booking to release its seats
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.booking_service = booking_service

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(v1_router, prefix="/api")

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": app_settings.APP_VERSION,
            "storage": app_settings.STORAGE_BACKEND,
        }

    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, exc: BookingError):
        """Map engine errors to their HTTP status."""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies as invalid_request."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "invalid_request", "detail": str(exc.errors())},
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc) if app_settings.DEBUG else None,
            },
        )

    return app


# Create application instance
app = create_app()


def run():
    """Run the application with uvicorn."""
    uvicorn.run(
        "movieseat.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
