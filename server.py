"""
FastAPI ASGI Application Entry Point for the Health Analyzer Backend.

Run with:
    uvicorn server:app --reload --port 5000

Architecture:
- server.py: FastAPI app definition (THIS FILE)
- app/api/routes.py: API endpoint definitions
- app/main.py: Service logic (OCR + prescription extraction) and CLI
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import config
from app.api.routes import router as api_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ============================================================================
# Startup: Dependency Validation
# ============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run startup checks when the server starts."""
    logger.info("="*80)
    logger.info(f"Starting {config.SERVICE_NAME} v{config.SERVICE_VERSION}")
    logger.info("="*80)

    try:
        from app.utils.dependency_check import check_all_dependencies, check_external_tools

        check_all_dependencies()
        check_external_tools()

        logger.info("✅ All startup checks passed. API server ready.")
    except Exception as e:
        logger.error(f"❌ Startup validation failed: {e}")
        logger.warning("⚠️  Server will start but some features may not work correctly")

    yield


# ============================================================================
# FastAPI Application Instance
# ============================================================================
app = FastAPI(
    title="Health Analyzer API",
    description="Food nutrition lookup and prescription OCR analysis",
    version=config.SERVICE_VERSION,
    lifespan=lifespan,
)

# ============================================================================
# CORS Configuration
# ============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# ============================================================================
# Root / Health Endpoints
# ============================================================================
@app.get("/", tags=["System"])
async def root():
    """Service banner."""
    return {
        "status": "Health Analyzer Backend Running",
        "version": config.SERVICE_VERSION,
        "endpoints": {
            "food": "POST /analyze-food",
            "prescription": "POST /analyze-prescription"
        }
    }


@app.get("/health", tags=["System"])
async def health_check():
    """
    Health check endpoint to verify the API is running.

    Returns:
        JSON with status and version information
    """
    return {
        "status": "healthy",
        "service": config.SERVICE_NAME,
        "version": config.SERVICE_VERSION
    }


app.include_router(api_router)


# ============================================================================
# Exception Handlers
# ============================================================================
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    """Render HTTP errors as ``{"error": <detail>}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """
    Global exception handler for unhandled errors.

    This ensures the API always returns a JSON response, even for unexpected errors.
    """
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": str(exc),
            "type": type(exc).__name__
        }
    )


# ============================================================================
# Development Server
# ============================================================================
if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server running on port {config.PORT}")
    uvicorn.run(
        "server:app",
        host=config.HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower()
    )
