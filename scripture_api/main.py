"""Scripture Reader FastAPI Application."""
from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from scripture_api.config import get_settings
from scripture_api.database import initialize_connection_pool, close_connection_pool
from scripture_api.services.cache_service import initialize_redis, close_redis
from scripture_api.models.schemas import HealthCheck
from scripture_api.utils.exceptions import DatabaseError, ExternalServiceError
from scripture_api.routers import (
    admin,
    auth,
    bible_versions,
    books,
    chat,
    cross_references,
    highlights,
    notes,
    post_interactions,
    posts,
    presence,
    verses,
    word_meaning,
)
from scripture_api.middleware.csrf import CSRFMiddleware
from scripture_api.middleware.request_logging import RequestLoggingMiddleware

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = get_settings()

logger.info(f"CORS allowed origins: {settings.allowed_origins}")
app = FastAPI(
    title=settings.app_name,
    description="Scripture reading, study and community API",
    version=settings.app_version
)

app.add_middleware(CSRFMiddleware, settings=settings)
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[settings.csrf_header_name, "X-Version-Fallback"],
)


@app.on_event("startup")
async def startup_event():
    """Initialize resources on application startup."""
    logger.info("Initializing application resources...")
    try:
        initialize_connection_pool()
        initialize_redis()
        logger.info("Application startup complete")
    except Exception as e:
        logger.error(f"Failed to initialize application: {e}")
        raise


@app.on_event("shutdown")
async def shutdown_event():
    """Clean up resources on application shutdown."""
    logger.info("Shutting down application...")
    try:
        close_connection_pool()
        close_redis()
        logger.info("Application shutdown complete")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")


app.include_router(auth.router)
app.include_router(bible_versions.router)
app.include_router(verses.router)
app.include_router(books.router)
app.include_router(cross_references.router)
app.include_router(highlights.router)
app.include_router(notes.router)
app.include_router(posts.router)
app.include_router(post_interactions.router)
app.include_router(presence.router)
app.include_router(admin.router)
app.include_router(chat.router)
app.include_router(word_meaning.router)


def _health() -> HealthCheck:
    return HealthCheck(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.app_version,
    )


@app.get("/", response_model=HealthCheck)
async def root():
    return _health()


@app.get("/health", response_model=HealthCheck)
async def health_check():
    """Health check endpoint."""
    return _health()


@app.exception_handler(DatabaseError)
async def database_error_handler(request, exc):
    logger.error(f"Database error: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


@app.exception_handler(ExternalServiceError)
async def external_service_error_handler(request, exc):
    logger.error(f"External service error: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
