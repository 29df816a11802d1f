"""
Модели данных приложения
"""

from .user import Base, User
from .chat import Chat, Message

__all__ = ["User", "Chat", "Message", "Base"]
