import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.database import get_engine
from app.models.responses import HealthCheckResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthCheckResponse)
def health_check(engine: Engine = Depends(get_engine)):
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        connected = True
    except SQLAlchemyError as e:
        logger.error("Health check database ping failed: %s", e)
        connected = False

    return {
        "status": "healthy" if connected else "degraded",
        "timestamp": datetime.now().isoformat(),
        "database_connected": connected,
        "database_backend": engine.dialect.name,
    }
