"""
Общие фикстуры: in-memory SQLite, TestClient и фейковые модели вместо LLM шлюза
"""

import json
from typing import Dict, List

import pytest
from core.auth import create_access_token, hash_password
from core.database import build_engine, get_db_session, get_session_factory, init_db
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from main import app
from models import User
from schemas.ai import ModelInfo
from services.model_registry import ModelRegistry, get_model_registry
from sqlalchemy.orm import sessionmaker

TEST_DATABASE_URL = "sqlite:///:memory:"
TEST_PASSWORD = "Secret123"
CHAT_MODEL_ID = "ep-test-chat"
TITLE_MODEL_ID = "ep-test-lite"


@pytest.fixture
def engine():
    """Отдельная in-memory база на каждый тест"""
    engine = build_engine(TEST_DATABASE_URL)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def registry() -> ModelRegistry:
    return ModelRegistry(
        [
            ModelInfo(id=CHAT_MODEL_ID, name="Test Chat", base_url="http://gateway.test/v1", api_key="sk-test"),
            ModelInfo(id=TITLE_MODEL_ID, name="Doubao-lite-32k", base_url="http://gateway.test/v1", api_key="sk-test"),
        ]
    )


@pytest.fixture
def client(session_factory, registry):
    """TestClient с подменёнными сессией БД и реестром моделей"""

    def get_test_session():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db_session] = get_test_session
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_model_registry] = lambda: registry

    yield TestClient(app)

    app.dependency_overrides.clear()


def make_user(db_session, email: str, name: str = None, password: str = TEST_PASSWORD, **kwargs) -> User:
    user = User(
        email=email,
        name=name,
        hashed_password=hash_password(password) if password else None,
        **kwargs,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def bearer(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email)}"}


@pytest.fixture
def user(db_session) -> User:
    return make_user(db_session, "alice@example.com", name="alice", provider="email")


@pytest.fixture
def auth_headers(user) -> Dict[str, str]:
    return bearer(user)


@pytest.fixture
def other_user(db_session) -> User:
    return make_user(db_session, "bob@example.com", name="bob", provider="email")


@pytest.fixture
def other_headers(other_user) -> Dict[str, str]:
    return bearer(other_user)


@pytest.fixture
def fake_llm(monkeypatch):
    """
    Подменяет фабрику моделей фейковой моделью.

    Returns:
        Функция install(*responses, error_on_chunk_number=None) -> модель
    """

    def install(*responses: str, error_on_chunk_number: int = None) -> FakeListChatModel:
        model = FakeListChatModel(responses=list(responses), error_on_chunk_number=error_on_chunk_number)
        monkeypatch.setattr("server.ai_endpoints.build_chat_model", lambda *args, **kwargs: model)
        monkeypatch.setattr("services.title.build_chat_model", lambda *args, **kwargs: model)
        return model

    return install


def ui_message(message_id: str, role: str, text: str) -> dict:
    return {"id": message_id, "role": role, "parts": [{"type": "text", "text": text}]}


def parse_sse(body: str) -> List[object]:
    """Разбирает тело SSE ответа в список событий; [DONE] остаётся строкой"""
    events = []
    for line in body.splitlines():
        if not line.startswith("data:"):
            continue
        data = line[len("data:"):].strip()
        events.append(data if data == "[DONE]" else json.loads(data))
    return events
