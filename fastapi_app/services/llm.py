"""
Фабрика клиентов LLM шлюза
"""

from core.constants import LLM_TIMEOUT_SECONDS
from langchain_openai import ChatOpenAI
from schemas.ai import ModelInfo


def build_chat_model(model: ModelInfo, **kwargs) -> ChatOpenAI:
    """
    Создаёт ChatOpenAI для OpenAI-совместимого эндпоинта модели.

    Args:
        model: Модель из реестра
        **kwargs: Параметры генерации (temperature, max_tokens, ...)
    """
    kwargs.setdefault("timeout", LLM_TIMEOUT_SECONDS)
    # Повторы на стороне клиента отключены: поток не переотправляется
    kwargs.setdefault("max_retries", 0)
    return ChatOpenAI(model=model.id, base_url=model.base_url, api_key=model.api_key or "EMPTY", **kwargs)
