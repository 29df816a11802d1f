"""
Генерация названия чата по первому сообщению
"""

import logging

import openai
from config import Settings
from constants import MAX_TITLE_LENGTH, TITLE_MAX_OUTPUT_TOKENS, TITLE_TEMPERATURE
from core.constants import LLM_RETRY_ATTEMPTS
from langchain_core.language_models import BaseChatModel
from prompts import title_prompt
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .llm import build_chat_model
from .model_registry import ModelRegistry

logger = logging.getLogger(__name__)

TITLE_QUOTES = "\"'`“”‘’«»「」《》"

RETRYABLE_ERRORS = (
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)


def fallback_title(text: str) -> str:
    return " ".join(text.split())[:MAX_TITLE_LENGTH]


def clean_title(raw: str) -> str:
    """Первая непустая строка ответа без пробелов и кавычек по краям"""
    for line in raw.splitlines():
        line = line.strip().strip(TITLE_QUOTES).strip()
        if line:
            return line
    return ""


def _content_text(content) -> str:
    if isinstance(content, str):
        return content
    return "".join(block.get("text", "") for block in content if isinstance(block, dict))


@retry(
    stop=stop_after_attempt(LLM_RETRY_ATTEMPTS),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    retry=retry_if_exception_type(RETRYABLE_ERRORS),
    reraise=True,
)
async def _ainvoke_title(llm: BaseChatModel, text: str) -> str:
    messages = title_prompt.format_messages(text=text, max_length=MAX_TITLE_LENGTH)
    response = await llm.ainvoke(messages)
    return _content_text(response.content)


async def generate_title(text: str, registry: ModelRegistry, settings: Settings) -> str:
    """
    Генерирует название чата.

    Args:
        text: Первое сообщение пользователя
        registry: Реестр моделей
        settings: Настройки (имя модели для названий)

    Returns:
        Название; исходный текст, если модель не зарегистрирована;
        обрезанный текст при пустом ответе или ошибке шлюза
    """
    model = registry.find_by_name(settings.title_model_name)
    if model is None:
        logger.warning(f"Title model '{settings.title_model_name}' is not registered")
        return text

    llm = build_chat_model(model, max_tokens=TITLE_MAX_OUTPUT_TOKENS, temperature=TITLE_TEMPERATURE)
    try:
        raw = await _ainvoke_title(llm, text)
    except Exception as e:
        logger.warning(f"Title generation failed: {e}", extra={"model_id": model.id})
        return fallback_title(text)

    title = clean_title(raw)
    if not title:
        logger.info("Empty title from model, using fallback", extra={"model_id": model.id})
        return fallback_title(text)
    return title
