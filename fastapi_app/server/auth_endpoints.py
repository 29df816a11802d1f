"""
Эндпоинты для авторизации
"""

import logging

from constants import PROVIDER_EMAIL
from core.auth import authenticate_user, create_access_token, get_current_user, hash_password
from core.constants import TOKEN_TYPE_BEARER
from core.database import get_db_session
from fastapi import APIRouter, Depends, Response, status
from models import User
from repositories import UserRepository
from schemas.auth import TokenResponse, UserLogin, UserRegister, UserResponse
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id, user.email),
        token_type=TOKEN_TYPE_BEARER,
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_data: UserRegister,
    db: Session = Depends(get_db_session),
):
    """
    Регистрирует нового пользователя и возвращает JWT токен.

    Args:
        user_data: Email, пароль и необязательное имя
        db: Сессия базы данных

    Returns:
        JWT токен и информация о пользователе
    """
    logger.info(f"Registration request for email: {user_data.email}")

    # ResourceAlreadyExistsError будет обработан error handler
    user = UserRepository(db).create_account(
        email=user_data.email,
        hashed_password=hash_password(user_data.password),
        name=user_data.name,
    )
    logger.info(
        f"User registered successfully: {user.email} (ID: {user.id})",
        extra={"provider": PROVIDER_EMAIL},
    )
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
async def login_user(
    user_data: UserLogin,
    db: Session = Depends(get_db_session),
):
    """
    Аутентифицирует пользователя и возвращает JWT токен.

    Raises:
        InvalidCredentialsError: Неверный email или пароль
    """
    logger.info(f"Login request for email: {user_data.email}")
    user = authenticate_user(db, email=user_data.email, password=user_data.password)
    logger.info(f"User logged in successfully: {user.email} (ID: {user.id})")
    return _token_response(user)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Информация о текущем пользователе по JWT токену"""
    logger.info(f"[ME] User info requested: id={current_user.id}, email={current_user.email}")
    return UserResponse.model_validate(current_user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout_user(current_user: User = Depends(get_current_user)):
    """
    Выход из системы.

    Токены не хранятся на сервере: клиент просто забывает токен.
    """
    logger.info(f"[LOGOUT] User logged out: id={current_user.id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
