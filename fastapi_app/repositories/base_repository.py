"""
Базовый репозиторий с общими операциями
"""

import logging
from typing import Generic, List, Optional, Type, TypeVar

from core.exceptions import DatabaseError, ResourceAlreadyExistsError
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Базовый репозиторий с общими CRUD операциями.

    Example:
        >>> class UserRepository(BaseRepository[User]):
        ...     def __init__(self, db: Session):
        ...         super().__init__(db, User)
    """

    resource_name: str = "Resource"

    def __init__(self, db: Session, model: Type[T]):
        """
        Args:
            db: SQLAlchemy сессия
            model: Класс модели SQLAlchemy
        """
        self.db = db
        self.model = model

    def get_by_id(self, id) -> Optional[T]:
        """Получить объект по первичному ключу или None"""
        return self.db.get(self.model, id)

    def get_all(self, *order_by, skip: int = 0, limit: Optional[int] = None) -> List[T]:
        """
        Получить объекты с сортировкой и пагинацией.

        Args:
            order_by: Выражения сортировки
            skip: Количество пропускаемых записей
            limit: Максимальное количество записей (None - без ограничения)
        """
        query = select(self.model).order_by(*order_by).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return list(self.db.execute(query).scalars().all())

    def count(self, *conditions) -> int:
        """Подсчитать количество объектов, удовлетворяющих условиям"""
        query = select(func.count()).select_from(self.model)
        if conditions:
            query = query.where(*conditions)
        return self.db.execute(query).scalar_one()

    def commit(self, identifier: str = "") -> None:
        """
        Фиксирует транзакцию.

        Raises:
            ResourceAlreadyExistsError: При нарушении уникальности
            DatabaseError: Прочие ошибки базы данных
        """
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(
                f"Integrity error on {self.model.__name__} commit",
                extra={"model": self.model.__name__, "error": str(e.orig)},
            )
            raise ResourceAlreadyExistsError(self.resource_name, identifier) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Commit failed for {self.model.__name__}: {e}")
            raise DatabaseError("Database commit failed", details={"model": self.model.__name__}) from e

    def delete(self, obj: T) -> None:
        """Удалить объект (hard delete)"""
        self.db.delete(obj)
        self.db.commit()
        logger.debug(f"Deleted {self.model.__name__}", extra={"model": self.model.__name__})
