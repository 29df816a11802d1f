"""
Преобразование UI сообщений клиента
"""

import logging
from typing import Any, Dict, List, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from schemas.chat import UIMessage

logger = logging.getLogger(__name__)

PART_TEXT = "text"
PART_FILE = "file"


def extract_text(message: UIMessage) -> str:
    """
    Склеивает текстовые части сообщения.

    Сообщение без parts, но с content (старый формат) возвращает content.
    """
    if not message.parts:
        return message.content or ""
    return "".join(
        part.get("text", "") for part in message.parts if part.get("type") == PART_TEXT
    )


def _image_block(part: Dict[str, Any]) -> Dict[str, Any] | None:
    media_type = part.get("mediaType") or part.get("media_type") or ""
    url = part.get("url")
    if not url or not media_type.startswith("image/"):
        return None
    return {"type": "image_url", "image_url": {"url": url}}


def _content_for(message: UIMessage) -> str | List[Dict[str, Any]]:
    if not message.parts:
        return message.content or ""

    blocks: List[Dict[str, Any]] = []
    for part in message.parts:
        part_type = part.get("type")
        if part_type == PART_TEXT and part.get("text"):
            blocks.append({"type": "text", "text": part["text"]})
        elif part_type == PART_FILE and message.role == "user":
            block = _image_block(part)
            if block:
                blocks.append(block)
        # reasoning, tool-*, step-start и прочие служебные части модели не нужны

    if all(block["type"] == "text" for block in blocks):
        return "".join(block["text"] for block in blocks)
    return blocks


def convert_ui_messages(messages: Sequence[UIMessage]) -> List[BaseMessage]:
    """
    Переводит историю UI сообщений в сообщения langchain.

    Сообщения с пустым содержимым пропускаются.
    """
    converted: List[BaseMessage] = []
    for message in messages:
        content = _content_for(message)
        if not content:
            logger.debug("Skipping empty message", extra={"message_id": message.id})
            continue
        if message.role == "user":
            converted.append(HumanMessage(content=content))
        elif message.role == "assistant":
            converted.append(AIMessage(content=content))
        else:
            converted.append(SystemMessage(content=content))
    return converted


def assistant_message(message_id: str, text: str) -> UIMessage:
    """Собирает UI сообщение ассистента из сгенерированного текста"""
    parts: List[Dict[str, Any]] = [{"type": "step-start"}]
    if text:
        parts.append({"type": "text", "text": text, "state": "done"})
    return UIMessage(id=message_id, role="assistant", parts=parts)
