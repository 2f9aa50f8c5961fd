"""
ExploreWithMe main service - application entry point.

Users, categories, events, participation requests, comments and
compilations. View counts come from the stats service over HTTP.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from explorewithme.api.errors import register_exception_handlers
from explorewithme.api.middleware import RequestLoggingMiddleware
from explorewithme.core.config import get_settings
from explorewithme.core.logging import get_logger, setup_logging
from explorewithme.core.metrics import metrics_endpoint
from explorewithme.main_service.infrastructure import close_stats_client
from explorewithme.main_service.router import api_router
from explorewithme.main_service.services.cache_service import close_redis, get_cache_stats, get_redis

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        service="main",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        stats_server=settings.STATS_SERVER_URL,
    )

    redis_client = await get_redis()
    if redis_client:
        logger.info("redis_ready")
    else:
        logger.warning("redis_unavailable", message="Running without category cache")

    yield

    await close_stats_client()
    await close_redis()
    logger.info("application_shutdown")


app = FastAPI(
    title=f"{settings.APP_NAME} main service",
    version=settings.APP_VERSION,
    description="Events, participation requests, comments and compilations",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware, service="main")
register_exception_handlers(app)

app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    cache_stats = await get_cache_stats()
    return {
        "status": "healthy",
        "service": "main",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "cache": cache_stats,
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
def metrics():
    return metrics_endpoint()
