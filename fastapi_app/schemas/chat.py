"""
Схемы для работы с чатами и сообщениями
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MessageRole = Literal["user", "assistant", "system"]


class UIMessage(BaseModel):
    """
    Сообщение в формате UI клиента.

    Текст хранится в parts: {"type": "text", "text": "..."}; вложения -
    {"type": "file", "mediaType": "image/png", "url": "data:..."}.
    Поле content поддерживается для клиентов без parts.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1, max_length=64)
    role: MessageRole
    parts: List[Dict[str, Any]] = Field(default_factory=list)
    content: Optional[str] = None


class ChatCreate(BaseModel):
    """Схема для создания нового чата"""

    model_config = ConfigDict(populate_by_name=True)

    model_id: str = Field(..., alias="modelId", min_length=1, max_length=128)
    id: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=32,
        pattern=r"^[A-Za-z0-9_-]+$",
        description="ID чата; если не передан, будет сгенерирован",
    )
    title: Optional[str] = Field(default=None, max_length=255)


class ChatUpdate(BaseModel):
    """Схема для обновления чата"""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    model_id: Optional[str] = Field(None, alias="modelId", min_length=1, max_length=128)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be blank")
        return v


class MessageResponse(BaseModel):
    """Схема ответа с сообщением"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    chat_id: str
    role: str
    content: str
    parts: Optional[List[Dict[str, Any]]] = None
    position: int
    created_at: datetime


class ChatSummary(BaseModel):
    """Чат без сообщений (для списка в сайдбаре)"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    model_id: str
    created_at: datetime
    updated_at: datetime


class ChatResponse(ChatSummary):
    """Чат вместе с сообщениями"""

    messages: List[MessageResponse] = Field(default_factory=list)


class ChatListResponse(BaseModel):
    """Схема ответа со списком чатов"""

    chats: List[ChatSummary]
    total: int


class ChatHistoryResponse(BaseModel):
    """Все чаты пользователя вместе с сообщениями"""

    chats: List[ChatResponse]
    total: int


class MessageListResponse(BaseModel):
    """Схема ответа со списком сообщений"""

    messages: List[MessageResponse]
    total: int


class SaveMessagesRequest(BaseModel):
    """Полная замена истории чата"""

    messages: List[UIMessage]


class AddMessageRequest(BaseModel):
    """Добавление одного сообщения"""

    message: UIMessage
