"""
Эндпоинты для настройки списка моделей
"""

import logging

from core.auth import get_current_user
from fastapi import APIRouter, Depends, Response, status
from models import User
from schemas.ai import ModelInfo, ModelInfoResponse, ModelInfoUpdate, ModelListResponse
from services.model_registry import ModelRegistry, get_model_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/models", tags=["Models"])


@router.get("", response_model=ModelListResponse)
async def list_models(
    current_user: User = Depends(get_current_user),
    registry: ModelRegistry = Depends(get_model_registry),
):
    """Список моделей без API ключей и модель по умолчанию"""
    return ModelListResponse(
        models=[ModelInfoResponse.from_model(m) for m in registry.list_models()],
        default_model_id=registry.default_model_id,
    )


@router.get("/{model_id}", response_model=ModelInfoResponse)
async def get_model(
    model_id: str,
    current_user: User = Depends(get_current_user),
    registry: ModelRegistry = Depends(get_model_registry),
):
    return ModelInfoResponse.from_model(registry.get(model_id))


@router.post("", response_model=ModelInfoResponse, status_code=status.HTTP_201_CREATED)
async def add_model(
    model: ModelInfo,
    current_user: User = Depends(get_current_user),
    registry: ModelRegistry = Depends(get_model_registry),
):
    """
    Добавить модель.

    Raises:
        ResourceAlreadyExistsError: Модель с таким ID уже есть
    """
    logger.info(f"[MODELS] user_id={current_user.id} adds model {model.id}")
    return ModelInfoResponse.from_model(registry.add(model))


@router.patch("/{model_id}", response_model=ModelInfoResponse)
async def update_model(
    model_id: str,
    changes: ModelInfoUpdate,
    current_user: User = Depends(get_current_user),
    registry: ModelRegistry = Depends(get_model_registry),
):
    logger.info(f"[MODELS] user_id={current_user.id} updates model {model_id}")
    return ModelInfoResponse.from_model(registry.update(model_id, changes))


@router.delete("/{model_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_model(
    model_id: str,
    current_user: User = Depends(get_current_user),
    registry: ModelRegistry = Depends(get_model_registry),
):
    logger.info(f"[MODELS] user_id={current_user.id} removes model {model_id}")
    registry.remove(model_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
