"""
LearnHub FastAPI Application

Main entry point for the LearnHub API.
Serves the course catalog, learner progress, the lesson player,
certificates and admin content management.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Common library imports
from common.database import MongoDB
from common.utils import error_response, success_response

# App-specific imports
from learnhub.config import settings
from learnhub.database.collections import INDEXES
from learnhub.repositories import CrudServiceError, InMemoryCrudRepository, MongoCrudRepository
from learnhub.services.player import InvalidPlayerActionError

# Import routers
from learnhub.routers import (
    courses_router,
    progress_router,
    player_router,
    certificates_router,
    admin_router,
)

# Import service initialization
from learnhub.dependencies import init_all_services

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


# =============================================================================
# Database Instance
# =============================================================================
main_db = MongoDB()


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown tasks like database connections
    and service initialization.
    """
    # Startup
    print(f"Starting {settings.PLATFORM_NAME} API...")
    settings.validate_required()

    if settings.uses_memory_backend():
        repository = InMemoryCrudRepository()
        print("Using in-memory record store")
    else:
        await main_db.connect(
            uri=settings.MONGODB_URI,
            database_name=settings.MONGODB_DATABASE,
            indexes=INDEXES,
        )
        print(f"Connected to database: {settings.MONGODB_DATABASE}")
        repository = MongoCrudRepository(main_db.db)

    init_all_services(
        repository=repository,
        jwt_secret=settings.JWT_SECRET,
        jwt_algorithm=settings.JWT_ALGORITHM,
        frontend_url=settings.FRONTEND_URL,
    )
    print("All services initialized successfully!")

    print(f"{settings.PLATFORM_NAME} API started successfully!")

    yield

    # Shutdown
    print(f"Shutting down {settings.PLATFORM_NAME} API...")
    if main_db.is_connected:
        await main_db.disconnect()
    print(f"{settings.PLATFORM_NAME} API shut down complete.")


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title="LearnHub API",
    description="E-learning course catalog, progress tracking and lesson player",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.is_development() else None,
    redoc_url="/redoc" if settings.is_development() else None,
)

# =============================================================================
# CORS Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================
@app.exception_handler(CrudServiceError)
async def crud_service_error_handler(request: Request, exc: CrudServiceError):
    logger.error(f"Record store failure on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content=error_response("Record store unavailable, please retry", code="SERVICE_UNAVAILABLE"),
    )


@app.exception_handler(InvalidPlayerActionError)
async def invalid_player_action_handler(request: Request, exc: InvalidPlayerActionError):
    return JSONResponse(
        status_code=409,
        content=error_response(
            str(exc),
            code="INVALID_PLAYER_ACTION",
            details={"action": exc.action, "state": exc.state.value},
        ),
    )


# =============================================================================
# Include Routers (all under /api/v1 prefix)
# =============================================================================
API_PREFIX = "/api/v1"

app.include_router(courses_router, prefix=API_PREFIX, tags=["Courses"])
app.include_router(progress_router, prefix=API_PREFIX, tags=["Progress"])
app.include_router(player_router, prefix=API_PREFIX, tags=["Player"])
app.include_router(certificates_router, prefix=API_PREFIX, tags=["Certificates"])
app.include_router(admin_router, prefix=API_PREFIX, tags=["Admin"])


# =============================================================================
# Health Check Endpoint
# =============================================================================
@app.get("/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Returns the status of the API and the record store.
    """
    return success_response({
        "status": "ok",
        "version": VERSION,
        "backend": settings.CRUD_BACKEND,
        "database": main_db.is_connected,
    })


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
