"""
Репозиторий для работы с чатами и сообщениями
"""

import logging
import secrets
import string
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from constants import CHAT_ID_LENGTH, DEFAULT_CHAT_TITLE, RESOURCE_CHAT, RESOURCE_MESSAGE
from core.exceptions import ResourceAlreadyExistsError, ResourceNotFoundError, ValidationError
from models import Chat, Message
from schemas.chat import UIMessage
from services.ui_messages import extract_text
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, selectinload

from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

CHAT_ID_ALPHABET = string.ascii_letters + string.digits + "_-"


def generate_chat_id(length: int = CHAT_ID_LENGTH) -> str:
    """Короткий URL-безопасный идентификатор чата"""
    return "".join(secrets.choice(CHAT_ID_ALPHABET) for _ in range(length))


class ChatRepository(BaseRepository[Chat]):
    """
    Репозиторий для операций с чатами.

    Все выборки ограничены владельцем: чужой чат неотличим от отсутствующего.
    """

    resource_name = RESOURCE_CHAT

    def __init__(self, db: Session):
        super().__init__(db, Chat)

    # ===== CHATS =====

    def get_for_user(self, chat_id: str, user_id: int, with_messages: bool = False) -> Optional[Chat]:
        """
        Получить чат по ID и user_id (для проверки владельца).

        Args:
            chat_id: ID чата
            user_id: ID пользователя
            with_messages: Сразу загрузить сообщения

        Returns:
            Чат или None если не найден
        """
        query = select(Chat).where(Chat.id == chat_id, Chat.user_id == user_id)
        if with_messages:
            query = query.options(selectinload(Chat.messages))
        return self.db.execute(query).scalar_one_or_none()

    def get_for_user_or_404(self, chat_id: str, user_id: int, with_messages: bool = False) -> Chat:
        chat = self.get_for_user(chat_id, user_id, with_messages=with_messages)
        if not chat:
            logger.warning(f"[CHAT] Chat not found: id={chat_id}, user_id={user_id}")
            raise ResourceNotFoundError(RESOURCE_CHAT, chat_id)
        return chat

    def list_for_user(
        self,
        user_id: int,
        skip: int = 0,
        limit: Optional[int] = None,
        with_messages: bool = False,
    ) -> List[Chat]:
        """Чаты пользователя, недавно обновлённые первыми"""
        query = (
            select(Chat)
            .where(Chat.user_id == user_id)
            .order_by(Chat.updated_at.desc(), Chat.created_at.desc())
            .offset(skip)
        )
        if limit is not None:
            query = query.limit(limit)
        if with_messages:
            query = query.options(selectinload(Chat.messages))
        return list(self.db.execute(query).scalars().all())

    def count_for_user(self, user_id: int) -> int:
        return self.count(Chat.user_id == user_id)

    def create(
        self,
        user_id: int,
        model_id: str,
        chat_id: Optional[str] = None,
        title: Optional[str] = None,
    ) -> Chat:
        """
        Создать новый чат.

        Args:
            user_id: ID владельца
            model_id: ID модели
            chat_id: ID, выбранный клиентом; если не задан - генерируется
            title: Название (по умолчанию DEFAULT_CHAT_TITLE)

        Raises:
            ResourceAlreadyExistsError: Если чат с таким ID уже существует
        """
        chat_id = chat_id or generate_chat_id()
        if self.db.get(Chat, chat_id) is not None:
            raise ResourceAlreadyExistsError(RESOURCE_CHAT, chat_id)

        now = datetime.now(timezone.utc)
        chat = Chat(
            id=chat_id,
            user_id=user_id,
            model_id=model_id,
            title=(title or "").strip() or DEFAULT_CHAT_TITLE,
            created_at=now,
            updated_at=now,
        )
        self.db.add(chat)
        self.commit(chat_id)
        self.db.refresh(chat)

        logger.info(f"[CHAT] Created chat: id={chat.id}, user_id={user_id}, model_id={model_id}")
        return chat

    def update(self, chat: Chat, title: Optional[str] = None, model_id: Optional[str] = None) -> Chat:
        """Обновить название и/или модель чата"""
        if title is not None:
            chat.title = title
        if model_id is not None:
            chat.model_id = model_id
        chat.updated_at = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(chat)
        return chat

    # ===== MESSAGES =====

    def list_messages(self, chat: Chat) -> List[Message]:
        return list(
            self.db.execute(
                select(Message)
                .where(Message.chat_id == chat.id)
                .order_by(Message.position, Message.created_at)
            )
            .scalars()
            .all()
        )

    def _build_message(self, chat_id: str, message: UIMessage, position: int) -> Message:
        return Message(
            id=message.id,
            chat_id=chat_id,
            role=message.role,
            content=extract_text(message),
            parts=list(message.parts) if message.parts else None,
            position=position,
            created_at=datetime.now(timezone.utc),
        )

    def replace_messages(self, chat: Chat, messages: Sequence[UIMessage]) -> List[Message]:
        """
        Полностью заменить историю чата одной транзакцией.

        Raises:
            ValidationError: Если в списке повторяются ID сообщений
            ResourceAlreadyExistsError: Если ID сообщения занят в другом чате
        """
        ids = [m.id for m in messages]
        if len(ids) != len(set(ids)):
            raise ValidationError("Duplicate message ids", details={"chat_id": chat.id})

        self.db.execute(delete(Message).where(Message.chat_id == chat.id))
        rows = [self._build_message(chat.id, m, position) for position, m in enumerate(messages)]
        self.db.add_all(rows)
        chat.updated_at = datetime.now(timezone.utc)
        self.commit(chat.id)
        # ORM-коллекция могла быть загружена до bulk delete
        self.db.expire(chat, ["messages"])

        logger.info(f"[CHAT] Saved {len(rows)} messages for chat_id={chat.id}")
        return rows

    def add_message(self, chat: Chat, message: UIMessage) -> Message:
        """
        Добавить сообщение в конец чата.

        Raises:
            ResourceAlreadyExistsError: Если сообщение с таким ID уже есть
        """
        if self.db.get(Message, message.id) is not None:
            raise ResourceAlreadyExistsError(RESOURCE_MESSAGE, message.id)

        last_position = self.db.execute(
            select(func.max(Message.position)).where(Message.chat_id == chat.id)
        ).scalar()
        row = self._build_message(chat.id, message, 0 if last_position is None else last_position + 1)
        self.db.add(row)
        chat.updated_at = datetime.now(timezone.utc)
        self.commit(message.id)
        self.db.refresh(row)
        return row

    def delete_message(self, chat: Chat, message_id: str) -> List[str]:
        """
        Удалить сообщение из чата.

        Удаление сообщения пользователя забирает с собой ответ ассистента,
        идущий сразу за ним.

        Returns:
            Список удалённых ID

        Raises:
            ResourceNotFoundError: Если сообщения нет в этом чате
        """
        messages = self.list_messages(chat)
        index = next((i for i, m in enumerate(messages) if m.id == message_id), None)
        if index is None:
            raise ResourceNotFoundError(RESOURCE_MESSAGE, message_id)

        doomed = [messages[index]]
        following = messages[index + 1] if index + 1 < len(messages) else None
        if doomed[0].role == "user" and following is not None and following.role == "assistant":
            doomed.append(following)

        for row in doomed:
            self.db.delete(row)
        chat.updated_at = datetime.now(timezone.utc)
        self.db.commit()

        deleted = [row.id for row in doomed]
        logger.info(f"[CHAT] Deleted messages {deleted} from chat_id={chat.id}")
        return deleted
