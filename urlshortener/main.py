from contextlib import asynccontextmanager

from fastapi import FastAPI

from urlshortener.api import health, redirect, urls
from urlshortener.api.errors import register_exception_handlers
from urlshortener.core.config import settings
from urlshortener.core.logging_config import configure_logging
from urlshortener.db import database
from urlshortener.db.models import Base

logger = configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Application '{settings.PROJECT_NAME}' starting up.")
    if not database.verify_database_connection():
        raise RuntimeError("Database connection failed, refusing to start")
    Base.metadata.create_all(bind=database.engine)
    logger.info("Database models initialized/checked.")
    database.verify_redis_connection()

    yield

    logger.info("Shutting down gracefully...")
    database.engine.dispose()
    if database.redis_client is not None:
        database.redis_client.close()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="URL shortener: short code allocation, resolution and listing",
    lifespan=lifespan,
)

register_exception_handlers(app)

# Fixed paths first; the redirect router catches every other single segment
app.include_router(health.router)
app.include_router(urls.router)
app.include_router(urls.legacy_router)
app.include_router(redirect.router)
