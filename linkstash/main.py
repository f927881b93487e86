"""LinkStash Backend - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from linkstash.config import get_settings
from linkstash.routers import links, metadata

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown."""
    settings = get_settings()
    logger.info("Starting LinkStash Backend...")

    if not settings.classifier_configured:
        logger.warning("ANTHROPIC_API_KEY not set - /api/categorize will answer 500")
    if not settings.storage_configured:
        logger.warning("Supabase not configured - link storage and vocabulary sync disabled")

    logger.info("LinkStash Backend started successfully")

    yield

    logger.info("LinkStash Backend shutdown complete")


app = FastAPI(
    title="LinkStash Backend",
    description="Bookmark metadata extraction, categorization and storage API",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as ``{"error": <message>}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


# Include routers
app.include_router(metadata.router)
app.include_router(links.router)


@app.get("/health")
async def health_check() -> dict:
    """
    Health check endpoint for monitoring.

    Reports whether the LLM classifier and Supabase storage are configured;
    the service itself is always up if this answers.
    """
    settings = get_settings()
    return {
        "status": "healthy",
        "services": {
            "classifier": {"configured": settings.classifier_configured},
            "storage": {"configured": settings.storage_configured},
        },
    }
