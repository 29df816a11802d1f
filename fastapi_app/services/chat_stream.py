"""
Потоковая генерация ответа в формате UI message stream

Каждое событие - SSE кадр `data: <json>`, поток завершается `data: [DONE]`.
"""

import json
import logging
import uuid
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Sequence

from constants import STREAM_DONE_MARKER
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from repositories import ChatRepository
from schemas.chat import UIMessage
from sqlalchemy.orm import sessionmaker

from .ui_messages import assistant_message

logger = logging.getLogger(__name__)

OnComplete = Callable[[str, str], Awaitable[None] | None]


def new_message_id() -> str:
    return f"msg-{uuid.uuid4().hex}"


def ui_event(payload: Dict[str, Any]) -> Dict[str, str]:
    """SSE кадр для EventSourceResponse"""
    return {"data": json.dumps(payload, ensure_ascii=False)}


def chunk_text(content) -> str:
    if isinstance(content, str):
        return content
    # Блочный формат: [{"type": "text", "text": ...}, {"type": "reasoning", ...}]
    return "".join(
        block.get("text", "")
        for block in content
        if isinstance(block, dict) and block.get("type") == "text"
    )


async def stream_ui_message(
    llm: BaseChatModel,
    messages: Sequence[BaseMessage],
    message_id: str,
    on_complete: Optional[OnComplete] = None,
) -> AsyncIterator[Dict[str, str]]:
    """
    Транслирует ответ модели в события UI message stream.

    Ошибка провайдера не переотправляет запрос: в поток уходит событие
    error и маркер завершения.

    Args:
        llm: Модель чата
        messages: История в формате langchain
        message_id: ID сообщения ассистента
        on_complete: Вызывается с (message_id, text) после успешной генерации
    """
    text_id = f"text-{message_id}"
    parts: List[str] = []

    try:
        yield ui_event({"type": "start", "messageId": message_id})
        yield ui_event({"type": "start-step"})
        yield ui_event({"type": "text-start", "id": text_id})

        async for chunk in llm.astream(list(messages)):
            delta = chunk_text(chunk.content)
            if not delta:
                continue
            parts.append(delta)
            yield ui_event({"type": "text-delta", "id": text_id, "delta": delta})

        yield ui_event({"type": "text-end", "id": text_id})

        if on_complete is not None:
            result = on_complete(message_id, "".join(parts))
            if result is not None:
                await result

        yield ui_event({"type": "finish-step"})
        yield ui_event({"type": "finish"})
        logger.info(
            "Stream finished",
            extra={"message_id": message_id, "chunks": len(parts), "chars": sum(map(len, parts))},
        )
    except Exception as e:
        logger.error(f"Stream failed: {e}", extra={"message_id": message_id}, exc_info=True)
        yield ui_event({"type": "error", "errorText": str(e) or e.__class__.__name__})

    yield {"data": STREAM_DONE_MARKER}


def conversation_saver(
    session_factory: sessionmaker,
    chat_id: str,
    user_id: int,
    model_id: str,
    history: Sequence[UIMessage],
) -> OnComplete:
    """
    Возвращает колбэк, сохраняющий беседу в чат после генерации.

    Запрос уже закрыл свою сессию к моменту завершения потока, поэтому
    колбэк открывает собственную.
    """

    def save(message_id: str, text: str) -> None:
        with session_factory() as db:
            repository = ChatRepository(db)
            chat = repository.get_for_user(chat_id, user_id)
            if chat is None:
                logger.warning(f"Chat {chat_id} disappeared before saving the stream")
                return
            chat.model_id = model_id
            repository.replace_messages(chat, [*history, assistant_message(message_id, text)])

    return save
