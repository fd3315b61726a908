"""
Todo REST API - FastAPI Application

Main entry point for the Todo API.
Uses the generic common/ library for infrastructure and app/ for business logic.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Common library imports
from common.database import MongoDB
from common.utils import success_response
from common.utils.handlers import register_exception_handlers

# App-specific imports
from app.config import settings
from app.database import ensure_indexes
from app.dependencies import init_all_services

# Import routers
from app.routers import (
    auth_router,
    user_router,
    todo_router,
)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

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

    Handles startup and shutdown tasks like database connections.
    Startup fails fast when required configuration is missing.
    """
    # Startup
    logger.info("Starting Todo API...")
    settings.validate_required()

    await main_db.connect(
        uri=settings.MONGODB_URI,
        database_name=settings.MONGODB_DATABASE,
    )
    await ensure_indexes(main_db.db)

    init_all_services(
        db=main_db.db,
        jwt_secret=settings.JWT_SECRET,
        jwt_algorithm=settings.JWT_ALGORITHM,
        access_token_expire_seconds=settings.JWT_ACCESS_TOKEN_EXPIRE_SECONDS,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )
    logger.info(f"Todo API started on {settings.API_PREFIX}")

    yield

    # Shutdown
    logger.info("Shutting down Todo API...")
    await main_db.disconnect()
    logger.info("Todo API shut down complete.")


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title=settings.API_TITLE,
    description="Owner-scoped to-do lists behind JWT authentication",
    version=settings.API_VERSION,
    debug=settings.DEBUG,
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

register_exception_handlers(app)

# =============================================================================
# Include Routers
# =============================================================================
app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(user_router, prefix=settings.API_PREFIX)
app.include_router(todo_router, prefix=settings.API_PREFIX)


# =============================================================================
# Health Check Endpoint
# =============================================================================
@app.get("/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Returns the status of the API and database connection.
    """
    return success_response({
        "status": "ok",
        "database": main_db.is_connected,
    })


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api_v1:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
