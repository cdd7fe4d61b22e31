"""Developer Portal API - Main Application."""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from config import get_settings
from logging_config import configure_logging
from developers import router as developers_router
from users import router as users_router
from apps import router as apps_router
from api_products import router as api_products_router

logger = structlog.get_logger()
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    configure_logging(settings.log_level)
    logger.info(
        "starting_developer_portal_api",
        environment=settings.environment,
        organization=settings.apigee_edge_organization,
    )
    yield
    logger.info("shutting_down_developer_portal_api")


app = FastAPI(
    title="Developer Portal API",
    version="1.0.0",
    description="Backend API exposing Apigee Edge developers, apps and API products",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(developers_router, prefix="/api/developers", tags=["Developers"])
app.include_router(users_router, prefix="/api/users", tags=["Users"])
app.include_router(apps_router, prefix="/api/apps", tags=["Apps"])
app.include_router(api_products_router, prefix="/api/api-products", tags=["API Products"])


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "service": "developer-portal-backend"}


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Developer Portal API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True  # Auto-reload on code changes (dev mode)
    )
