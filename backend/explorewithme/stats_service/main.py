"""
ExploreWithMe stats service - application entry point.

Stores endpoint hits sent by the main service and answers aggregated view
count queries.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from explorewithme.api.errors import register_exception_handlers
from explorewithme.api.middleware import RequestLoggingMiddleware
from explorewithme.core.config import get_settings
from explorewithme.core.logging import get_logger, setup_logging
from explorewithme.core.metrics import metrics_endpoint
from explorewithme.stats_service.routes.stats import router as stats_router

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger = get_logger(__name__)
    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        service="stats",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )
    yield
    logger.info("application_shutdown")


app = FastAPI(
    title=f"{settings.APP_NAME} stats service",
    version=settings.APP_VERSION,
    description="Endpoint hit recording and view statistics",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware, service="stats")
register_exception_handlers(app)

app.include_router(stats_router)


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "service": "stats",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
def metrics():
    return metrics_endpoint()
