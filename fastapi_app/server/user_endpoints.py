"""
Эндпоинты админ-панели управления пользователями
"""

import logging
from typing import List

from constants import RESOURCE_USER
from core.auth import get_current_user
from core.database import get_db_session
from core.exceptions import ResourceNotFoundError
from fastapi import APIRouter, Depends, Response, status
from models import User
from repositories import UserRepository
from schemas.auth import UserResponse
from schemas.users import UserCreate, UserStatsResponse, UserUpdate
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_repository(db: Session = Depends(get_db_session)) -> UserRepository:
    return UserRepository(db)


def _get_user_or_404(users: UserRepository, user_id: int) -> User:
    user = users.get_by_id(user_id)
    if not user:
        raise ResourceNotFoundError(RESOURCE_USER, user_id)
    return user


@router.get("", response_model=List[UserResponse])
async def list_users(
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    """Все пользователи, новые первыми"""
    return [UserResponse.model_validate(u) for u in users.list_users()]


@router.get("/stats", response_model=UserStatsResponse)
async def user_stats(
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    """
    Статистика пользователей.

    Returns:
        total, with_name, without_name, recent_count (за последние 7 дней)
    """
    return UserStatsResponse(**users.stats())


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    return UserResponse.model_validate(_get_user_or_404(users, user_id))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    """
    Создать пользователя из админки.

    Такой пользователь не имеет пароля и не может войти, пока не
    зарегистрируется сам.

    Raises:
        ResourceAlreadyExistsError: Email уже используется
    """
    logger.info(f"[USERS] user_id={current_user.id} creates user {user_data.email}")
    user = users.create(email=user_data.email, name=(user_data.name or "").strip() or None)
    return UserResponse.model_validate(user)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    """
    Обновить пользователя.

    Args:
        user_id: ID пользователя
        user_data: email меняется только непустым; name - всегда, если передан
    """
    user = _get_user_or_404(users, user_id)
    update_name = "name" in user_data.model_fields_set
    user = users.update(
        user,
        email=user_data.email,
        name=(user_data.name or "").strip() or None,
        update_name=update_name,
    )
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    """Удалить пользователя; его чаты удаляются каскадно"""
    user = _get_user_or_404(users, user_id)
    users.delete(user)
    logger.info(f"[USERS] user_id={current_user.id} deleted user id={user_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
