import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from inventory_api.db import engine
from inventory_api.utils.time import uptime_seconds, utcnow

log = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", tags=["health"])
def health():
    db_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except SQLAlchemyError:
        log.warning("Health check: database unreachable", exc_info=True)

    return {
        "status": "OK" if db_ok else "degraded",
        "timestamp": utcnow().isoformat(),
        "uptime": uptime_seconds(),
        "db": db_ok,
    }
