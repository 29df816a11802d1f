"""
Схемы для работы с моделями и генерацией ответов
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .chat import UIMessage


class ModelInfo(BaseModel):
    """Описание OpenAI-совместимой модели в реестре"""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, max_length=128, description="ID модели/эндпоинта у провайдера")
    name: str = Field(..., min_length=1, max_length=128)
    description: Optional[str] = None
    base_url: str = Field(..., alias="baseURL", min_length=1)
    api_key: str = Field(default="", alias="apiKey")


class ModelInfoUpdate(BaseModel):
    """Частичное обновление модели"""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    description: Optional[str] = None
    base_url: Optional[str] = Field(default=None, alias="baseURL", min_length=1)
    api_key: Optional[str] = Field(default=None, alias="apiKey")


class ModelInfoResponse(BaseModel):
    """Публичное представление модели, ключ не раскрывается"""

    id: str
    name: str
    description: Optional[str] = None
    base_url: str
    has_api_key: bool

    @classmethod
    def from_model(cls, model: ModelInfo) -> "ModelInfoResponse":
        return cls(
            id=model.id,
            name=model.name,
            description=model.description,
            base_url=model.base_url,
            has_api_key=bool(model.api_key),
        )


class ModelListResponse(BaseModel):
    models: List[ModelInfoResponse]
    default_model_id: Optional[str] = None


class ChatStreamRequest(BaseModel):
    """Запрос на потоковую генерацию ответа"""

    model_config = ConfigDict(populate_by_name=True)

    messages: List[UIMessage] = Field(..., min_length=1)
    model_id: str = Field(..., alias="modelId", min_length=1)
    chat_id: Optional[str] = Field(default=None, alias="chatId")


class TitleRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=10000)


class TitleResponse(BaseModel):
    title: str
