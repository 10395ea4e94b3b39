from fastapi import APIRouter

from urlshortener.db import database

router = APIRouter(tags=["health"])


# simple liveness
@router.get("/health")
def health_check():
    return {"status": "healthy", "service": "url-shortener"}


# readiness: check DB + Redis connectivity
@router.get("/ready")
def readiness():
    details = {
        "db": "ok" if database.verify_database_connection() else "error",
        "redis": "disabled",
    }
    if database.redis_client is not None:
        details["redis"] = "ok" if database.verify_redis_connection() else "error"

    # Redis is optional; the service degrades to store lookups without it
    ready = details["db"] == "ok"
    return {"ready": ready, "details": details}
