"""
Репозиторий для работы с пользователями
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from constants import PROVIDER_ADMIN, PROVIDER_EMAIL, RECENT_USERS_DAYS, RESOURCE_USER
from core.exceptions import EmailInUseError
from models import User
from sqlalchemy import select
from sqlalchemy.orm import Session

from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Репозиторий для операций с пользователями"""

    resource_name = RESOURCE_USER

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Получить пользователя по email.

        Args:
            email: Email пользователя (уже нормализованный)

        Returns:
            Пользователь или None если не найден
        """
        return self.db.execute(select(User).where(User.email == email)).scalar_one_or_none()

    def get_active_by_email(self, email: str) -> Optional[User]:
        return self.db.execute(
            select(User).where(User.email == email, User.is_active == True)  # noqa: E712
        ).scalar_one_or_none()

    def list_users(self) -> List[User]:
        """Все пользователи, новые первыми"""
        return self.get_all(User.created_at.desc(), User.id.desc())

    def _ensure_email_free(self, email: str, exclude_id: Optional[int] = None) -> None:
        existing = self.get_by_email(email)
        if existing and existing.id != exclude_id:
            raise EmailInUseError(email)

    def create(
        self,
        email: str,
        name: Optional[str] = None,
        hashed_password: Optional[str] = None,
        provider: str = PROVIDER_ADMIN,
    ) -> User:
        """
        Создать пользователя.

        Args:
            email: Email пользователя
            name: Имя; пустая строка сохраняется как NULL
            hashed_password: Хеш пароля (None у пользователей из админки)
            provider: Источник аккаунта

        Raises:
            EmailInUseError: Если email уже занят
        """
        self._ensure_email_free(email)

        user = User(
            email=email,
            name=name or None,
            hashed_password=hashed_password,
            provider=provider,
            is_active=True,
        )
        self.db.add(user)
        self.commit(email)
        self.db.refresh(user)

        logger.info(f"Created user: {user.email} (ID: {user.id})", extra={"provider": provider})
        return user

    def create_account(self, email: str, hashed_password: str, name: Optional[str] = None) -> User:
        """
        Регистрация по email/паролю; имя по умолчанию - часть email до @.

        Пользователь, заведённый через админку без пароля, активируется:
        ему задаётся пароль, а пустое имя заполняется.

        Raises:
            EmailInUseError: Email занят аккаунтом с паролем
        """
        existing = self.get_by_email(email)
        if existing is not None and existing.hashed_password is None:
            return self._activate(existing, hashed_password, name or email.split("@")[0])

        return self.create(
            email=email,
            name=name or email.split("@")[0],
            hashed_password=hashed_password,
            provider=PROVIDER_EMAIL,
        )

    def _activate(self, user: User, hashed_password: str, name: str) -> User:
        user.hashed_password = hashed_password
        user.provider = PROVIDER_EMAIL
        user.is_active = True
        if not user.name:
            user.name = name
        self.commit(user.email)
        self.db.refresh(user)
        logger.info(f"Activated user: {user.email} (ID: {user.id})")
        return user

    def update(
        self,
        user: User,
        email: Optional[str] = None,
        name: Optional[str] = None,
        update_name: bool = False,
    ) -> User:
        """
        Обновить пользователя.

        Args:
            user: Пользователь
            email: Новый email; пустое значение игнорируется
            name: Новое имя
            update_name: Применять ли name (пустое имя превращается в NULL)

        Raises:
            EmailInUseError: Если новый email занят другим пользователем
        """
        if email:
            self._ensure_email_free(email, exclude_id=user.id)
            user.email = email
        if update_name:
            user.name = name or None

        self.commit(email or user.email)
        self.db.refresh(user)
        logger.info(f"Updated user: {user.email} (ID: {user.id})")
        return user

    def stats(self, now: Optional[datetime] = None) -> dict:
        """
        Статистика для админ-панели.

        Returns:
            total, with_name, without_name, recent_count (созданы за последние 7 дней)
        """
        now = now or datetime.now(timezone.utc)
        week_ago = now - timedelta(days=RECENT_USERS_DAYS)

        total = self.count()
        with_name = self.count(User.name.is_not(None))
        recent_count = self.count(User.created_at >= week_ago)

        return {
            "total": total,
            "with_name": with_name,
            "without_name": total - with_name,
            "recent_count": recent_count,
        }
