"""
Схемы для авторизации
"""

import re
from datetime import datetime
from typing import Optional

from core.constants import (
    EMAIL_PATTERN,
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PASSWORD_LENGTH_BYTES,
    MAX_PASSWORD_LENGTH_CHARS,
    MIN_EMAIL_LENGTH,
    MIN_PASSWORD_LENGTH,
)
from pydantic import BaseModel, ConfigDict, Field, field_validator


def normalize_email(value: str) -> str:
    """Проверяет формат email и приводит его к нижнему регистру"""
    value = value.strip()
    if not re.match(EMAIL_PATTERN, value):
        raise ValueError("Invalid email format")
    return value.lower()


class UserRegister(BaseModel):
    """
    Схема для регистрации нового пользователя.

    Attributes:
        email: Email пользователя (должен быть валидным)
        password: Пароль (заглавные, строчные буквы и цифры)
        name: Отображаемое имя; по умолчанию часть email до @
    """

    email: str = Field(
        ...,
        min_length=MIN_EMAIL_LENGTH,
        max_length=MAX_EMAIL_LENGTH,
        description="Email пользователя",
        examples=["alice@example.com"],
    )
    password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        max_length=MAX_PASSWORD_LENGTH_CHARS,
        description="Пароль (заглавные, строчные буквы и цифры)",
        examples=["SecurePassword123!"],
    )
    name: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH, description="Имя")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """
        Валидация надёжности пароля.

        Требования:
        - Минимум одна заглавная буква
        - Минимум одна строчная буква
        - Минимум одна цифра
        - Не более MAX_PASSWORD_LENGTH_BYTES байт (ограничение bcrypt)
        """
        if len(v.encode("utf-8")) > MAX_PASSWORD_LENGTH_BYTES:
            raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_LENGTH_BYTES} bytes")
        if not re.search(r"[A-Z]", v):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", v):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r"[0-9]", v):
            raise ValueError("Password must contain at least one digit")
        return v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class UserLogin(BaseModel):
    """Схема для входа пользователя"""

    email: str = Field(..., min_length=MIN_EMAIL_LENGTH, max_length=MAX_EMAIL_LENGTH)
    password: str = Field(..., min_length=1, max_length=MAX_PASSWORD_LENGTH_CHARS)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class UserResponse(BaseModel):
    """Схема ответа с информацией о пользователе"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    provider: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class TokenResponse(BaseModel):
    """Схема ответа с JWT токеном"""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse
