"""
EventHub API - Main Application Entry Point

Event listings, capacity-checked registrations and CSV export:
- Capacity checks against live registration totals, serialized per event
- Optional Redis caching of event listings
- Structured logging with request correlation
- SQLite (or any async SQLAlchemy backend) owned by the app lifespan
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eventhub.core.config import get_settings
from eventhub.core.logging import setup_logging, get_logger
from eventhub.core.metrics import metrics_endpoint
from eventhub.api.errors import register_exception_handlers
from eventhub.api.router import api_router
from eventhub.api.middleware import RequestLoggingMiddleware
from eventhub.db.base import Base
from eventhub.db.session import create_engine, create_sessionmaker
from eventhub.services.cache_service import get_redis, close_redis, get_cache_stats
from eventhub.services.seed_service import seed_sample_events
from eventhub.services.strategy_factory import get_registration_guard

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: acquire storage on startup, release on shutdown."""
    setup_logging(settings)
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        database=settings.DATABASE_URL.split("://", 1)[0],
        registration_guard=type(get_registration_guard()).__name__,
    )

    engine = create_engine(settings)
    app.state.engine = engine
    app.state.sessionmaker = create_sessionmaker(engine)

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database_ready")

        if settings.SEED_SAMPLE_DATA:
            async with app.state.sessionmaker() as session:
                await seed_sample_events(session)
    except Exception:
        logger.exception("database_initialization_failed")
        await engine.dispose()
        raise

    if await get_redis():
        logger.info("redis_ready")
    elif settings.REDIS_ENABLED:
        logger.warning("redis_unavailable", message="Running without cache")

    yield

    await close_redis()
    await engine.dispose()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Event listings and capacity-safe registrations",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)
app.include_router(api_router)


@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    cache_stats = await get_cache_stats()
    return {
        "status": "OK",
        "message": f"{settings.APP_NAME} is running",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "cache": cache_stats,
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
async def metrics():
    return metrics_endpoint()
