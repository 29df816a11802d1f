"""
Модуль для работы с авторизацией
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from config import get_settings
from core.constants import MAX_PASSWORD_LENGTH_BYTES
from core.database import get_db_session
from core.exceptions import InvalidCredentialsError, UnauthorizedError
from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from models import User
from passlib.context import CryptContext
from repositories import UserRepository
from sqlalchemy import select
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

# Схема безопасности для Bearer токена; отсутствие токена обрабатываем сами
security = HTTPBearer(auto_error=False)

# Контекст для хеширования паролей
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def _truncate_password(password: str) -> str:
    # Bcrypt имеет ограничение в 72 байта; режем по границе UTF-8 символа
    password_bytes = password.encode("utf-8")[:MAX_PASSWORD_LENGTH_BYTES]
    return password_bytes.decode("utf-8", errors="ignore")


def hash_password(password: str) -> str:
    """
    Хеширует пароль с учетом ограничения bcrypt в 72 байта.

    Args:
        password: Пароль для хеширования

    Returns:
        Хешированный пароль
    """
    return pwd_context.hash(_truncate_password(password))


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Проверяет пароль. Пользователь без хеша (создан из админки) войти не может.
    """
    if not hashed_password:
        return False
    return pwd_context.verify(_truncate_password(plain_password), hashed_password)


def create_access_token(user_id: int, email: str) -> str:
    """Создает JWT токен"""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(days=settings.auth_access_token_expire_days)
    to_encode = {"sub": str(user_id), "email": email, "exp": expire}
    return jwt.encode(to_encode, settings.auth_secret_key, algorithm=settings.auth_algorithm)


def decode_access_token(token: str) -> Optional[dict]:
    """Декодирует JWT токен; None для просроченного или подделанного"""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.auth_secret_key, algorithms=[settings.auth_algorithm])
    except jwt.ExpiredSignatureError:
        logger.warning("Token expired")
        return None
    except jwt.PyJWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None


def token_user_id(token: str) -> Optional[int]:
    """ID пользователя из claim 'sub' валидного токена"""
    payload = decode_access_token(token)
    if not payload:
        return None
    try:
        return int(payload["sub"])
    except (KeyError, ValueError, TypeError):
        logger.warning("Token payload missing or malformed 'sub' claim")
        return None


def authenticate_user(db: Session, email: str, password: str) -> User:
    """
    Аутентифицирует пользователя по email и паролю.

    Args:
        db: Сессия базы данных
        email: Email пользователя (нормализованный)
        password: Пароль пользователя

    Returns:
        Пользователь

    Raises:
        InvalidCredentialsError: Неизвестный email, неверный пароль,
            неактивный пользователь или пользователь без пароля
    """
    user = UserRepository(db).get_active_by_email(email)
    if not user or not verify_password(password, user.hashed_password):
        raise InvalidCredentialsError("Incorrect email or password")
    return user


def verify_token(token: str, db: Session) -> Optional[User]:
    """
    Проверяет JWT токен и возвращает пользователя.

    Args:
        token: JWT токен для проверки
        db: Сессия базы данных

    Returns:
        Активный пользователь, если токен валиден, иначе None
    """
    user_id = token_user_id(token)
    if user_id is None:
        return None

    user = db.execute(
        select(User).where(User.id == user_id, User.is_active == True)  # noqa: E712
    ).scalar_one_or_none()
    if not user:
        logger.warning(f"User with id {user_id} not found or inactive")
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    db: Session = Depends(get_db_session),
) -> User:
    """
    Dependency для получения текущего пользователя из JWT токена.

    Raises:
        UnauthorizedError: Если токен отсутствует или невалиден
    """
    if credentials is None:
        raise UnauthorizedError("Missing authorization token")

    user = verify_token(credentials.credentials, db)
    if not user:
        raise UnauthorizedError("Invalid or expired token")
    return user
