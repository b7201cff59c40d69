"""Health check endpoints"""
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eternal_admin.config import settings
from eternal_admin.database import get_db
from eternal_admin.utils.logger import logger

router = APIRouter(prefix="/health", tags=["health"])

# Track startup time
STARTUP_TIME = time.time()


@router.get("")
def health_check(db: Session = Depends(get_db)):
    """
    Server and database status

    A failing database probe is reported as `database: disconnected`.
    """
    database = "connected"
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Health check: database unreachable", exc_info=True)
        database = "disconnected"

    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.time() - STARTUP_TIME, 2),
        "environment": settings.ENVIRONMENT,
        "database": database,
    }


@router.get("/live")
def liveness_check():
    """
    Liveness check - verifies service is alive

    Returns 200 if process is alive
    """
    return {
        "status": "alive",
        "uptime_seconds": round(time.time() - STARTUP_TIME, 2),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
