"""
Schemas модуль с Pydantic моделями
"""

from .ai import (
    ChatStreamRequest,
    ModelInfo,
    ModelInfoResponse,
    ModelInfoUpdate,
    ModelListResponse,
    TitleRequest,
    TitleResponse,
)
from .auth import TokenResponse, UserLogin, UserRegister, UserResponse
from .chat import (
    AddMessageRequest,
    ChatCreate,
    ChatHistoryResponse,
    ChatListResponse,
    ChatResponse,
    ChatSummary,
    ChatUpdate,
    MessageListResponse,
    MessageResponse,
    SaveMessagesRequest,
    UIMessage,
)
from .users import UserCreate, UserStatsResponse, UserUpdate

__all__ = [
    # AI
    "ChatStreamRequest",
    "ModelInfo",
    "ModelInfoResponse",
    "ModelInfoUpdate",
    "ModelListResponse",
    "TitleRequest",
    "TitleResponse",
    # Auth
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "TokenResponse",
    # Chat
    "UIMessage",
    "ChatCreate",
    "ChatUpdate",
    "ChatSummary",
    "ChatResponse",
    "ChatListResponse",
    "ChatHistoryResponse",
    "MessageResponse",
    "MessageListResponse",
    "SaveMessagesRequest",
    "AddMessageRequest",
    # Users
    "UserCreate",
    "UserUpdate",
    "UserStatsResponse",
]
