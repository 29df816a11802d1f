"""
Модели чатов и сообщений
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, List, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .user import Base

if TYPE_CHECKING:
    from .user import User


class Chat(Base):
    """
    Модель чата пользователя.

    Attributes:
        id: Короткий строковый идентификатор (задаётся клиентом или генерируется)
        user_id: ID пользователя-владельца
        title: Название чата
        model_id: ID модели из реестра, с которой ведётся диалог
        created_at: Дата и время создания
        updated_at: Дата и время последнего изменения (ключ сортировки списка)
        messages: Сообщения в порядке создания
    """

    __tablename__ = "chats"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    model_id: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    user: Mapped["User"] = relationship("User", back_populates="chats")
    messages: Mapped[List["Message"]] = relationship(
        "Message",
        back_populates="chat",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Message.position",
    )

    __table_args__ = (Index("idx_chat_user_updated", "user_id", "updated_at"),)

    def __repr__(self) -> str:
        return f"<Chat(id='{self.id}', user_id={self.user_id}, title='{self.title}')>"


class Message(Base):
    """
    Модель сообщения в чате.

    Attributes:
        id: Идентификатор сообщения, присвоенный клиентом
        chat_id: ID чата
        role: Роль отправителя (user/assistant/system)
        content: Текст сообщения, склеенный из текстовых частей
        parts: Исходные части UI сообщения (JSON)
        position: Порядковый номер внутри чата
        created_at: Дата и время создания
    """

    __tablename__ = "messages"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    chat_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("chats.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    parts: Mapped[Optional[List[Any]]] = mapped_column(JSON, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    chat: Mapped["Chat"] = relationship("Chat", back_populates="messages")

    __table_args__ = (Index("idx_messages_chat_position", "chat_id", "position"),)

    def __repr__(self) -> str:
        return f"<Message(id='{self.id}', chat_id='{self.chat_id}', role='{self.role}')>"
