"""
Служебные эндпоинты FastAPI приложения
"""

import logging

from constants import (
    SERVICE_NAME,
    SERVICE_VERSION,
    STATUS_CONNECTED,
    STATUS_DEGRADED,
    STATUS_DISCONNECTED,
    STATUS_HEALTHY,
)
from core.database import get_db_session
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(db: Session = Depends(get_db_session)):
    """
    Проверка работоспособности API и подключения к базе данных.
    """
    health_status = {
        "status": STATUS_HEALTHY,
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "database": "unknown",
    }

    try:
        db.execute(text("SELECT 1"))
        health_status["database"] = STATUS_CONNECTED
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        health_status["database"] = STATUS_DISCONNECTED
        health_status["status"] = STATUS_DEGRADED

    return health_status
