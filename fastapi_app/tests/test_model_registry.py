"""
Тесты реестра моделей
"""

import json

import pytest
from config import Settings
from core.exceptions import ResourceAlreadyExistsError, ResourceNotFoundError, ValidationError
from schemas.ai import ModelInfo, ModelInfoUpdate
from services.model_registry import DEFAULT_MODELS, ModelRegistry, load_models


# ==================== Загрузка конфигурации ====================

def test_defaults_use_gateway_settings():
    settings = Settings(ai_gateway_api_key="sk-gw", ai_gateway_base_url="http://gw.test/v3")
    models = load_models(settings)
    assert [m.id for m in models] == [model_id for model_id, _, _ in DEFAULT_MODELS]
    assert {m.base_url for m in models} == {"http://gw.test/v3"}
    assert {m.api_key for m in models} == {"sk-gw"}


def test_models_config_replaces_defaults():
    config = json.dumps([{"id": "ep-1", "name": "One", "baseURL": "http://one.test"}])
    models = load_models(Settings(models_config=config, ai_gateway_api_key="sk-gw"))
    assert len(models) == 1
    assert models[0].base_url == "http://one.test"
    assert models[0].api_key == "sk-gw"


@pytest.mark.parametrize("config", ["not json", '{"id": "x"}', '[{"name": "no id"}]'])
def test_invalid_models_config(config):
    with pytest.raises(ValidationError):
        load_models(Settings(models_config=config))


# ==================== ModelRegistry ====================

def test_default_model_is_first(registry):
    assert registry.default_model_id == "ep-test-chat"


def test_configured_default(registry):
    configured = ModelRegistry(registry.list_models(), default_model_id="ep-test-lite")
    assert configured.default_model_id == "ep-test-lite"


def test_find_by_name(registry):
    assert registry.find_by_name("Doubao-lite-32k").id == "ep-test-lite"
    assert registry.find_by_name("missing") is None


def test_add_duplicate(registry):
    with pytest.raises(ResourceAlreadyExistsError):
        registry.add(ModelInfo(id="ep-test-chat", name="dup", base_url="http://x"))


def test_update_partial(registry):
    updated = registry.update("ep-test-chat", ModelInfoUpdate(description="новое описание"))
    assert updated.description == "новое описание"
    assert updated.api_key == "sk-test"


def test_remove(registry):
    registry.remove("ep-test-chat")
    assert registry.find("ep-test-chat") is None
    with pytest.raises(ResourceNotFoundError):
        registry.remove("ep-test-chat")


# ==================== /models API ====================

def test_list_hides_api_keys(client, auth_headers):
    data = client.get("/models", headers=auth_headers).json()
    assert data["default_model_id"] == "ep-test-chat"
    assert all("api_key" not in m for m in data["models"])
    assert all(m["has_api_key"] for m in data["models"])


def test_crud(client, auth_headers):
    created = client.post(
        "/models",
        json={"id": "ep-new", "name": "New", "baseURL": "http://new.test", "apiKey": ""},
        headers=auth_headers,
    )
    assert created.status_code == 201
    assert created.json()["has_api_key"] is False

    patched = client.patch("/models/ep-new", json={"apiKey": "sk-new"}, headers=auth_headers)
    assert patched.json()["has_api_key"] is True

    assert client.delete("/models/ep-new", headers=auth_headers).status_code == 204
    assert client.get("/models/ep-new", headers=auth_headers).status_code == 404


def test_api_add_duplicate(client, auth_headers):
    response = client.post(
        "/models",
        json={"id": "ep-test-chat", "name": "dup", "baseURL": "http://x"},
        headers=auth_headers,
    )
    assert response.status_code == 409
