"""
Эндпоинты для работы с чатами и их историей
"""

import logging

from constants import DEFAULT_CHAT_LIST_LIMIT
from core.auth import get_current_user
from core.database import get_db_session
from fastapi import APIRouter, Depends, Query, Response, status
from models import User
from repositories import ChatRepository
from schemas.chat import (
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
)
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chats", tags=["Chats"])


def get_chat_repository(db: Session = Depends(get_db_session)) -> ChatRepository:
    return ChatRepository(db)


@router.post("", response_model=ChatResponse, status_code=status.HTTP_201_CREATED)
async def create_chat(
    chat_data: ChatCreate,
    current_user: User = Depends(get_current_user),
    chats: ChatRepository = Depends(get_chat_repository),
):
    """
    Создать новый чат для текущего пользователя.

    Args:
        chat_data: ID модели, необязательные ID и название чата
        current_user: Текущий пользователь
        chats: Репозиторий чатов

    Returns:
        Созданный чат (без сообщений)
    """
    logger.info(f"[CHAT] Creating new chat for user_id={current_user.id}, title='{chat_data.title}'")
    chat = chats.create(
        user_id=current_user.id,
        model_id=chat_data.model_id,
        chat_id=chat_data.id,
        title=chat_data.title,
    )
    return ChatResponse.model_validate(chat)


@router.get("", response_model=ChatListResponse)
async def get_chats(
    current_user: User = Depends(get_current_user),
    chats: ChatRepository = Depends(get_chat_repository),
    skip: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_CHAT_LIST_LIMIT, ge=1, le=1000),
):
    """
    Получить список чатов текущего пользователя, недавно обновлённые первыми.

    Args:
        current_user: Текущий пользователь
        chats: Репозиторий чатов
        skip: Количество чатов для пропуска
        limit: Максимальное количество чатов
    """
    logger.info(f"[CHAT] Getting chats for user_id={current_user.id}, skip={skip}, limit={limit}")
    items = chats.list_for_user(current_user.id, skip=skip, limit=limit)
    total = chats.count_for_user(current_user.id)
    logger.info(f"[CHAT] Found {len(items)} chats (total: {total})")
    return ChatListResponse(
        chats=[ChatSummary.model_validate(chat) for chat in items],
        total=total,
    )


@router.get("/history", response_model=ChatHistoryResponse)
async def get_chat_history(
    current_user: User = Depends(get_current_user),
    chats: ChatRepository = Depends(get_chat_repository),
):
    """Все чаты пользователя вместе с сообщениями (загрузка истории при входе)"""
    items = chats.list_for_user(current_user.id, with_messages=True)
    logger.info(f"[CHAT] Loaded history for user_id={current_user.id}: {len(items)} chats")
    return ChatHistoryResponse(
        chats=[ChatResponse.model_validate(chat) for chat in items],
        total=len(items),
    )


@router.get("/{chat_id}", response_model=ChatResponse)
async def get_chat(
    chat_id: str,
    current_user: User = Depends(get_current_user),
    chats: ChatRepository = Depends(get_chat_repository),
):
    """Получить чат с сообщениями; чужой чат отдаёт 404"""
    chat = chats.get_for_user_or_404(chat_id, current_user.id, with_messages=True)
    return ChatResponse.model_validate(chat)


@router.patch("/{chat_id}", response_model=ChatSummary)
async def update_chat(
    chat_id: str,
    chat_data: ChatUpdate,
    current_user: User = Depends(get_current_user),
    chats: ChatRepository = Depends(get_chat_repository),
):
    """
    Обновить название и/или модель чата.

    Args:
        chat_id: ID чата
        chat_data: Новые значения
        current_user: Текущий пользователь
        chats: Репозиторий чатов
    """
    logger.info(f"[CHAT] Updating chat id={chat_id} for user_id={current_user.id}")
    chat = chats.get_for_user_or_404(chat_id, current_user.id)
    chat = chats.update(chat, title=chat_data.title, model_id=chat_data.model_id)
    return ChatSummary.model_validate(chat)


@router.delete("/{chat_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chat(
    chat_id: str,
    current_user: User = Depends(get_current_user),
    chats: ChatRepository = Depends(get_chat_repository),
):
    """Удалить чат вместе с сообщениями"""
    chat = chats.get_for_user_or_404(chat_id, current_user.id)
    chats.delete(chat)
    logger.info(f"[CHAT] Chat deleted: id={chat_id}, user_id={current_user.id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ===== MESSAGES =====


@router.get("/{chat_id}/messages", response_model=MessageListResponse)
async def get_chat_messages(
    chat_id: str,
    current_user: User = Depends(get_current_user),
    chats: ChatRepository = Depends(get_chat_repository),
):
    """Сообщения чата в порядке следования"""
    chat = chats.get_for_user_or_404(chat_id, current_user.id)
    messages = chats.list_messages(chat)
    return MessageListResponse(
        messages=[MessageResponse.model_validate(m) for m in messages],
        total=len(messages),
    )


@router.put("/{chat_id}/messages", response_model=MessageListResponse)
async def save_chat_messages(
    chat_id: str,
    payload: SaveMessagesRequest,
    current_user: User = Depends(get_current_user),
    chats: ChatRepository = Depends(get_chat_repository),
):
    """
    Полностью заменить историю чата.

    Клиент отправляет всю беседу после каждого ответа модели.
    """
    chat = chats.get_for_user_or_404(chat_id, current_user.id)
    messages = chats.replace_messages(chat, payload.messages)
    return MessageListResponse(
        messages=[MessageResponse.model_validate(m) for m in messages],
        total=len(messages),
    )


@router.post(
    "/{chat_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_chat_message(
    chat_id: str,
    payload: AddMessageRequest,
    current_user: User = Depends(get_current_user),
    chats: ChatRepository = Depends(get_chat_repository),
):
    """Добавить сообщение в конец чата"""
    chat = chats.get_for_user_or_404(chat_id, current_user.id)
    message = chats.add_message(chat, payload.message)
    logger.info(f"[CHAT] Message {message.id} added to chat_id={chat_id}")
    return MessageResponse.model_validate(message)


@router.delete("/{chat_id}/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chat_message(
    chat_id: str,
    message_id: str,
    current_user: User = Depends(get_current_user),
    chats: ChatRepository = Depends(get_chat_repository),
):
    """Удалить сообщение; вместе с вопросом пользователя удаляется ответ на него"""
    chat = chats.get_for_user_or_404(chat_id, current_user.id)
    chats.delete_message(chat, message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
