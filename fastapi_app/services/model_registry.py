"""
Реестр OpenAI-совместимых моделей
"""

import json
import logging
import threading
from functools import lru_cache
from typing import List, Optional

from config import Settings, get_settings
from constants import RESOURCE_MODEL
from core.exceptions import ResourceAlreadyExistsError, ResourceNotFoundError, ValidationError
from pydantic import ValidationError as PydanticValidationError
from schemas.ai import ModelInfo, ModelInfoUpdate

logger = logging.getLogger(__name__)

# (id эндпоинта, имя, описание)
DEFAULT_MODELS = [
    ("ep-20251203173341-sztlm", "Kimi-K2", "Kimi-K2"),
    ("ep-20251124145531-b7dkr", "Doubao-Seed-1.6(深度思考)", "豆包大模型"),
    ("ep-20251120155412-jmc8q", "Doubao-lite-32k", "豆包轻量模型"),
]


def default_models(settings: Settings) -> List[ModelInfo]:
    return [
        ModelInfo(
            id=model_id,
            name=name,
            description=description,
            base_url=settings.ai_gateway_base_url,
            api_key=settings.ai_gateway_api_key,
        )
        for model_id, name, description in DEFAULT_MODELS
    ]


def load_models(settings: Settings) -> List[ModelInfo]:
    """
    Загружает список моделей из MODELS_CONFIG или возвращает список по умолчанию.

    Отсутствующие в конфиге baseURL/apiKey берутся из настроек шлюза.

    Raises:
        ValidationError: Если MODELS_CONFIG не является JSON-массивом моделей
    """
    if not settings.models_config:
        return default_models(settings)

    try:
        raw = json.loads(settings.models_config)
        if not isinstance(raw, list):
            raise ValueError("MODELS_CONFIG must be a JSON array")
        models = []
        for item in raw:
            item.setdefault("baseURL", settings.ai_gateway_base_url)
            item.setdefault("apiKey", settings.ai_gateway_api_key)
            models.append(ModelInfo.model_validate(item))
    except (ValueError, TypeError, AttributeError, PydanticValidationError) as e:
        raise ValidationError("Invalid MODELS_CONFIG", details={"error": str(e)}) from e

    logger.info(f"Loaded {len(models)} models from MODELS_CONFIG")
    return models


class ModelRegistry:
    """
    Потокобезопасный список моделей, доступных чату.

    Порядок моделей сохраняется: первая модель - модель по умолчанию,
    если DEFAULT_MODEL_ID не задан.
    """

    def __init__(self, models: List[ModelInfo], default_model_id: Optional[str] = None):
        self._lock = threading.Lock()
        self._models = {model.id: model for model in models}
        self._default_model_id = default_model_id

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelRegistry":
        return cls(load_models(settings), default_model_id=settings.default_model_id)

    @property
    def default_model_id(self) -> Optional[str]:
        with self._lock:
            if self._default_model_id in self._models:
                return self._default_model_id
            return next(iter(self._models), None)

    def list_models(self) -> List[ModelInfo]:
        with self._lock:
            return list(self._models.values())

    def find(self, model_id: str) -> Optional[ModelInfo]:
        with self._lock:
            return self._models.get(model_id)

    def get(self, model_id: str) -> ModelInfo:
        """
        Raises:
            ResourceNotFoundError: Если модели нет в реестре
        """
        model = self.find(model_id)
        if model is None:
            raise ResourceNotFoundError(RESOURCE_MODEL, model_id)
        return model

    def find_by_name(self, name: str) -> Optional[ModelInfo]:
        with self._lock:
            return next((m for m in self._models.values() if m.name == name), None)

    def add(self, model: ModelInfo) -> ModelInfo:
        with self._lock:
            if model.id in self._models:
                raise ResourceAlreadyExistsError(RESOURCE_MODEL, model.id)
            self._models[model.id] = model
        logger.info(f"Model registered: {model.id}", extra={"model_name": model.name})
        return model

    def update(self, model_id: str, changes: ModelInfoUpdate) -> ModelInfo:
        with self._lock:
            current = self._models.get(model_id)
            if current is None:
                raise ResourceNotFoundError(RESOURCE_MODEL, model_id)
            updated = current.model_copy(update=changes.model_dump(exclude_unset=True))
            self._models[model_id] = updated
        logger.info(f"Model updated: {model_id}")
        return updated

    def remove(self, model_id: str) -> None:
        with self._lock:
            if self._models.pop(model_id, None) is None:
                raise ResourceNotFoundError(RESOURCE_MODEL, model_id)
        logger.info(f"Model removed: {model_id}")


@lru_cache()
def get_model_registry() -> ModelRegistry:
    """Синглтон реестра моделей (FastAPI dependency)"""
    return ModelRegistry.from_settings(get_settings())
