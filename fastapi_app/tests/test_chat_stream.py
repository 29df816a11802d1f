"""
Тесты потокового ответа POST /api/chat
"""

from constants import UI_STREAM_HEADER

from tests.conftest import CHAT_MODEL_ID, parse_sse, ui_message


def stream(client, headers, messages=None, **extra):
    body = {"messages": messages or [ui_message("u1", "user", "Привет")], "modelId": CHAT_MODEL_ID, **extra}
    return client.post("/api/chat", json=body, headers=headers)


# ==================== Потоковый ответ ====================

def test_event_sequence(client, auth_headers, fake_llm):
    fake_llm("Hi!")
    response = stream(client, auth_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert response.headers[UI_STREAM_HEADER] == "v1"

    events = parse_sse(response.text)
    assert events[-1] == "[DONE]"
    types = [e["type"] for e in events[:-1]]
    assert types[:3] == ["start", "start-step", "text-start"]
    assert types[-3:] == ["text-end", "finish-step", "finish"]
    assert events[0]["messageId"].startswith("msg-")

    deltas = [e["delta"] for e in events if isinstance(e, dict) and e["type"] == "text-delta"]
    assert "".join(deltas) == "Hi!"


def test_unknown_model(client, auth_headers, fake_llm):
    fake_llm("unused")
    response = client.post(
        "/api/chat",
        json={"messages": [ui_message("u1", "user", "hi")], "modelId": "nope"},
        headers=auth_headers,
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Model with id 'nope' not found"


def test_empty_messages_rejected(client, auth_headers):
    response = client.post("/api/chat", json={"messages": [], "modelId": CHAT_MODEL_ID}, headers=auth_headers)
    assert response.status_code == 422


def test_requires_auth(client):
    response = client.post(
        "/api/chat", json={"messages": [ui_message("u1", "user", "hi")], "modelId": CHAT_MODEL_ID}
    )
    assert response.status_code == 401


def test_provider_error_ends_stream(client, auth_headers, fake_llm):
    fake_llm("Hello world", error_on_chunk_number=2)
    events = parse_sse(stream(client, auth_headers).text)

    assert events[-1] == "[DONE]"
    assert events[-2]["type"] == "error"
    assert events[-2]["errorText"]
    types = [e["type"] for e in events[:-1]]
    assert "finish" not in types


def test_persists_conversation(client, auth_headers, fake_llm):
    fake_llm("Ответ")
    client.post("/chats", json={"modelId": "ep-old", "id": "streamed"}, headers=auth_headers)

    history = [ui_message("u1", "user", "Вопрос")]
    events = parse_sse(stream(client, auth_headers, messages=history, chatId="streamed").text)
    message_id = events[0]["messageId"]

    chat = client.get("/chats/streamed", headers=auth_headers).json()
    assert chat["model_id"] == CHAT_MODEL_ID
    assert [m["id"] for m in chat["messages"]] == ["u1", message_id]
    assert chat["messages"][1]["role"] == "assistant"
    assert chat["messages"][1]["content"] == "Ответ"


def test_foreign_chat_not_persisted(client, auth_headers, other_headers, fake_llm):
    fake_llm("Ответ")
    client.post("/chats", json={"modelId": CHAT_MODEL_ID, "id": "alice-chat"}, headers=auth_headers)

    response = stream(client, other_headers, chatId="alice-chat")
    assert parse_sse(response.text)[-1] == "[DONE]"

    chat = client.get("/chats/alice-chat", headers=auth_headers).json()
    assert chat["messages"] == []


def test_failed_stream_not_persisted(client, auth_headers, fake_llm):
    fake_llm("Hello world", error_on_chunk_number=1)
    client.post("/chats", json={"modelId": CHAT_MODEL_ID, "id": "broken"}, headers=auth_headers)

    stream(client, auth_headers, chatId="broken")
    chat = client.get("/chats/broken", headers=auth_headers).json()
    assert chat["messages"] == []
