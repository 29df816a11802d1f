"""
Схемы для админ-панели управления пользователями
"""

from typing import Optional

from core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH, MIN_EMAIL_LENGTH
from pydantic import BaseModel, Field, field_validator

from .auth import normalize_email


class UserCreate(BaseModel):
    """Создание пользователя из админки (без пароля)"""

    email: str = Field(..., min_length=MIN_EMAIL_LENGTH, max_length=MAX_EMAIL_LENGTH)
    name: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class UserUpdate(BaseModel):
    """
    Частичное обновление пользователя.

    Email меняется только если передан непустым; имя меняется всегда,
    когда поле присутствует в запросе (пустая строка очищает имя).
    """

    email: Optional[str] = Field(default=None, max_length=MAX_EMAIL_LENGTH)
    name: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if not v or not v.strip():
            return None
        return normalize_email(v)


class UserStatsResponse(BaseModel):
    """Сводка для карточек статистики"""

    total: int
    with_name: int
    without_name: int
    recent_count: int
