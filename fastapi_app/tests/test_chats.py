"""
Тесты истории чатов: CRUD, сообщения, изоляция между пользователями
"""

from constants import DEFAULT_CHAT_TITLE
from models import Message
from repositories import ChatRepository, generate_chat_id
from repositories.chat_repository import CHAT_ID_ALPHABET

from tests.conftest import CHAT_MODEL_ID, ui_message


def create_chat(client, headers, **payload) -> dict:
    body = {"modelId": CHAT_MODEL_ID, **payload}
    response = client.post("/chats", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def conversation() -> list:
    return [
        ui_message("m1", "user", "Привет"),
        ui_message("m2", "assistant", "Здравствуйте!"),
        ui_message("m3", "user", "Как дела?"),
        ui_message("m4", "assistant", "Отлично"),
    ]


# ==================== ID чатов ====================

def test_generated_id_shape():
    chat_id = generate_chat_id()
    assert len(chat_id) == 10
    assert set(chat_id) <= set(CHAT_ID_ALPHABET)


def test_generated_ids_differ():
    assert len({generate_chat_id() for _ in range(100)}) == 100


# ==================== CRUD чатов ====================

def test_create_with_defaults(client, auth_headers):
    chat = create_chat(client, auth_headers)
    assert len(chat["id"]) == 10
    assert chat["title"] == DEFAULT_CHAT_TITLE
    assert chat["model_id"] == CHAT_MODEL_ID
    assert chat["messages"] == []


def test_create_with_client_id(client, auth_headers):
    chat = create_chat(client, auth_headers, id="client_ID-1", title="Рецепты")
    assert chat["id"] == "client_ID-1"
    assert chat["title"] == "Рецепты"


def test_create_duplicate_id(client, auth_headers, other_headers):
    create_chat(client, auth_headers, id="same-id")
    response = client.post("/chats", json={"modelId": CHAT_MODEL_ID, "id": "same-id"}, headers=other_headers)
    assert response.status_code == 409


def test_create_rejects_bad_id(client, auth_headers):
    response = client.post("/chats", json={"modelId": CHAT_MODEL_ID, "id": "has space"}, headers=auth_headers)
    assert response.status_code == 422


def test_requires_auth(client):
    assert client.get("/chats").status_code == 401


def test_list_ordered_by_update(client, auth_headers):
    first = create_chat(client, auth_headers, title="first")
    second = create_chat(client, auth_headers, title="second")

    data = client.get("/chats", headers=auth_headers).json()
    assert data["total"] == 2
    assert [c["id"] for c in data["chats"]] == [second["id"], first["id"]]
    assert "messages" not in data["chats"][0]

    # запись сообщения поднимает чат наверх
    client.post(
        f"/chats/{first['id']}/messages",
        json={"message": ui_message("x1", "user", "bump")},
        headers=auth_headers,
    )
    data = client.get("/chats", headers=auth_headers).json()
    assert [c["id"] for c in data["chats"]] == [first["id"], second["id"]]


def test_list_pagination(client, auth_headers):
    for i in range(3):
        create_chat(client, auth_headers, title=f"chat {i}")
    data = client.get("/chats", params={"skip": 1, "limit": 1}, headers=auth_headers).json()
    assert data["total"] == 3
    assert len(data["chats"]) == 1
    assert data["chats"][0]["title"] == "chat 1"


def test_foreign_chat_is_not_found(client, auth_headers, other_headers):
    chat = create_chat(client, auth_headers)
    assert client.get(f"/chats/{chat['id']}", headers=other_headers).status_code == 404
    assert client.delete(f"/chats/{chat['id']}", headers=other_headers).status_code == 404
    assert client.get("/chats", headers=other_headers).json()["total"] == 0


def test_update_title_and_model(client, auth_headers):
    chat = create_chat(client, auth_headers)
    response = client.patch(
        f"/chats/{chat['id']}",
        json={"title": "  Новое название ", "modelId": "ep-other"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["title"] == "Новое название"
    assert response.json()["model_id"] == "ep-other"


def test_update_blank_title(client, auth_headers):
    chat = create_chat(client, auth_headers)
    response = client.patch(f"/chats/{chat['id']}", json={"title": "   "}, headers=auth_headers)
    assert response.status_code == 422


def test_delete_chat_removes_messages(client, auth_headers, db_session):
    chat = create_chat(client, auth_headers)
    client.put(f"/chats/{chat['id']}/messages", json={"messages": conversation()}, headers=auth_headers)

    assert client.delete(f"/chats/{chat['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"/chats/{chat['id']}", headers=auth_headers).status_code == 404

    assert db_session.query(Message).count() == 0


def test_history_embeds_messages(client, auth_headers):
    chat = create_chat(client, auth_headers)
    create_chat(client, auth_headers)
    client.put(f"/chats/{chat['id']}/messages", json={"messages": conversation()}, headers=auth_headers)

    data = client.get("/chats/history", headers=auth_headers).json()
    assert data["total"] == 2
    history = {c["id"]: c for c in data["chats"]}
    assert [m["id"] for m in history[chat["id"]]["messages"]] == ["m1", "m2", "m3", "m4"]


# ==================== Сообщения ====================

def test_replace_messages(client, auth_headers):
    chat = create_chat(client, auth_headers)
    url = f"/chats/{chat['id']}/messages"

    response = client.put(url, json={"messages": conversation()}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["total"] == 4

    # повторное сохранение полностью заменяет историю
    shorter = conversation()[:2]
    client.put(url, json={"messages": shorter}, headers=auth_headers)
    messages = client.get(url, headers=auth_headers).json()["messages"]
    assert [m["id"] for m in messages] == ["m1", "m2"]
    assert [m["position"] for m in messages] == [0, 1]
    assert messages[1]["content"] == "Здравствуйте!"
    assert messages[1]["parts"] == [{"type": "text", "text": "Здравствуйте!"}]


def test_replace_with_duplicate_ids(client, auth_headers):
    chat = create_chat(client, auth_headers)
    duplicated = [ui_message("d1", "user", "a"), ui_message("d1", "assistant", "b")]
    response = client.put(
        f"/chats/{chat['id']}/messages", json={"messages": duplicated}, headers=auth_headers
    )
    assert response.status_code == 400


def test_content_joins_text_parts(client, auth_headers):
    chat = create_chat(client, auth_headers)
    message = {
        "id": "multi",
        "role": "user",
        "parts": [
            {"type": "text", "text": "Что "},
            {"type": "file", "mediaType": "image/png", "url": "data:image/png;base64,AAAA"},
            {"type": "text", "text": "на картинке?"},
        ],
    }
    response = client.post(
        f"/chats/{chat['id']}/messages", json={"message": message}, headers=auth_headers
    )
    assert response.status_code == 201
    assert response.json()["content"] == "Что на картинке?"
    assert len(response.json()["parts"]) == 3


def test_add_message_appends(client, auth_headers):
    chat = create_chat(client, auth_headers)
    url = f"/chats/{chat['id']}/messages"
    client.put(url, json={"messages": conversation()[:2]}, headers=auth_headers)

    response = client.post(url, json={"message": ui_message("m9", "user", "ещё")}, headers=auth_headers)
    assert response.json()["position"] == 2

    duplicate = client.post(url, json={"message": ui_message("m9", "user", "ещё")}, headers=auth_headers)
    assert duplicate.status_code == 409


def test_delete_user_message_takes_reply(client, auth_headers):
    chat = create_chat(client, auth_headers)
    url = f"/chats/{chat['id']}/messages"
    client.put(url, json={"messages": conversation()}, headers=auth_headers)

    assert client.delete(f"{url}/m3", headers=auth_headers).status_code == 204
    messages = client.get(url, headers=auth_headers).json()["messages"]
    assert [m["id"] for m in messages] == ["m1", "m2"]


def test_delete_assistant_message_only(client, auth_headers):
    chat = create_chat(client, auth_headers)
    url = f"/chats/{chat['id']}/messages"
    client.put(url, json={"messages": conversation()}, headers=auth_headers)

    client.delete(f"{url}/m2", headers=auth_headers)
    messages = client.get(url, headers=auth_headers).json()["messages"]
    assert [m["id"] for m in messages] == ["m1", "m3", "m4"]


def test_delete_missing_message(client, auth_headers):
    chat = create_chat(client, auth_headers)
    response = client.delete(f"/chats/{chat['id']}/messages/nope", headers=auth_headers)
    assert response.status_code == 404


def test_foreign_chat_messages(client, auth_headers, other_headers):
    chat = create_chat(client, auth_headers)
    url = f"/chats/{chat['id']}/messages"
    assert client.get(url, headers=other_headers).status_code == 404
    assert client.put(url, json={"messages": []}, headers=other_headers).status_code == 404


# ==================== ChatRepository ====================

def test_list_for_user_scoped(db_session, user, other_user):
    chats = ChatRepository(db_session)
    chats.create(user_id=user.id, model_id=CHAT_MODEL_ID, chat_id="mine")
    chats.create(user_id=other_user.id, model_id=CHAT_MODEL_ID, chat_id="theirs")

    assert [c.id for c in chats.list_for_user(user.id)] == ["mine"]
    assert chats.count_for_user(other_user.id) == 1
    assert chats.get_for_user("theirs", user.id) is None
