"""
Модуль для работы с базой данных
"""

import logging
from functools import lru_cache
from typing import Iterator

from config import get_settings
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .constants import DEFAULT_MAX_OVERFLOW, DEFAULT_POOL_RECYCLE_SECONDS, DEFAULT_POOL_SIZE

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str) -> Engine:
    """
    Создаёт SQLAlchemy engine для указанного URL.

    Для PostgreSQL используется пул соединений:
    - pool_size=10: базовый размер пула соединений
    - max_overflow=20: дополнительные соединения при пиковой нагрузке
    - pool_pre_ping=True: проверка соединения перед использованием
    - pool_recycle=3600: переиспользование соединения каждый час

    Для SQLite (разработка и тесты) пул не настраивается, включаются
    внешние ключи, а in-memory база живёт в одном соединении.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=False, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=DEFAULT_POOL_SIZE,
        max_overflow=DEFAULT_MAX_OVERFLOW,
        pool_recycle=DEFAULT_POOL_RECYCLE_SECONDS,
        echo=False,
    )


@lru_cache()
def get_sync_engine() -> Engine:
    """Возвращает синглтон синхронного engine из настроек"""
    settings = get_settings()
    engine = build_engine(settings.database_endpoint)
    logger.info("Database sync engine initialized", extra={"dialect": engine.dialect.name})
    return engine


@lru_cache()
def get_session_factory() -> sessionmaker:
    return sessionmaker(bind=get_sync_engine(), expire_on_commit=False)


def get_db_session() -> Iterator[Session]:
    """
    Dependency для получения сессии базы данных.
    Использует yield pattern для автоматического закрытия сессии.
    """
    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()


def init_db(engine: Engine = None) -> None:
    """Создаёт все таблицы, если их ещё нет"""
    from models import Base

    engine = engine or get_sync_engine()
    Base.metadata.create_all(engine)
    logger.info("Database schema ensured")
