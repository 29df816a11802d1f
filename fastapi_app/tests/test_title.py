"""
Тесты генерации названия чата
"""

import httpx
import openai
import pytest
import services.title as title_service
from config import Settings
from langchain_core.messages import AIMessage
from services.model_registry import ModelRegistry
from services.title import clean_title, fallback_title, generate_title
from tenacity import wait_none


class FlakyModel:
    """Падает с сетевой ошибкой заданное число раз, затем отвечает"""

    def __init__(self, failures: int, answer: str = "Погода"):
        self.failures = failures
        self.answer = answer
        self.calls = 0

    async def ainvoke(self, messages):
        self.calls += 1
        if self.calls <= self.failures:
            raise openai.APIConnectionError(request=httpx.Request("POST", "http://gateway.test/v1"))
        return AIMessage(content=self.answer)


@pytest.fixture
def no_retry_wait(monkeypatch):
    monkeypatch.setattr(title_service._ainvoke_title.retry, "wait", wait_none())


# ==================== Очистка названия ====================

def test_strips_quotes_and_whitespace():
    assert clean_title('  "Погода в Москве"\n') == "Погода в Москве"
    assert clean_title("«天气查询»") == "天气查询"


def test_takes_first_line():
    assert clean_title("\nЗаголовок\nпояснение") == "Заголовок"


def test_empty():
    assert clean_title("  ''  ") == ""


def test_fallback_truncates():
    assert fallback_title("a" * 50) == "a" * 20
    assert fallback_title("  two\n words ") == "two words"


# ==================== Генерация названия ====================

@pytest.mark.asyncio
async def test_generates_title(registry, fake_llm):
    fake_llm('"Погода в Москве"')
    title = await generate_title("Какая погода в Москве?", registry, Settings())
    assert title == "Погода в Москве"


@pytest.mark.asyncio
async def test_missing_title_model_returns_text(fake_llm):
    fake_llm("unused")
    title = await generate_title("Длинный вопрос пользователя", ModelRegistry([]), Settings())
    assert title == "Длинный вопрос пользователя"


@pytest.mark.asyncio
async def test_empty_answer_falls_back(registry, fake_llm):
    fake_llm("   ")
    title = await generate_title("Очень длинный первый вопрос пользователя", registry, Settings())
    assert title == "Очень длинный первый"


@pytest.mark.asyncio
async def test_retries_transient_errors(registry, monkeypatch, no_retry_wait):
    model = FlakyModel(failures=2)
    monkeypatch.setattr(title_service, "build_chat_model", lambda *args, **kwargs: model)

    assert await generate_title("Погода?", registry, Settings()) == "Погода"
    assert model.calls == 3


@pytest.mark.asyncio
async def test_gives_up_after_attempts(registry, monkeypatch, no_retry_wait):
    model = FlakyModel(failures=10)
    monkeypatch.setattr(title_service, "build_chat_model", lambda *args, **kwargs: model)

    assert await generate_title("Погода?", registry, Settings()) == "Погода?"
    assert model.calls == 3


# ==================== /api/chat/title ====================

def test_title_endpoint(client, auth_headers, fake_llm):
    fake_llm("Рецепт борща")
    response = client.post("/api/chat/title", json={"text": "Как сварить борщ?"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"title": "Рецепт борща"}


def test_title_requires_text(client, auth_headers):
    response = client.post("/api/chat/title", json={"text": ""}, headers=auth_headers)
    assert response.status_code == 422
