"""
Тесты админ-панели пользователей
"""

from datetime import datetime, timedelta, timezone

from models import Chat
from repositories import UserRepository

from tests.conftest import CHAT_MODEL_ID, make_user


# ==================== /users API ====================

def test_list_newest_first(client, auth_headers, db_session):
    make_user(db_session, "later@example.com", password=None)
    response = client.get("/users", headers=auth_headers)
    assert response.status_code == 200
    assert [u["email"] for u in response.json()] == ["later@example.com", "alice@example.com"]


def test_create_user(client, auth_headers):
    response = client.post(
        "/users", json={"email": "Carol@Example.com", "name": "  "}, headers=auth_headers
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "carol@example.com"
    assert data["name"] is None
    assert data["provider"] == "admin"


def test_create_duplicate_email(client, auth_headers, user):
    response = client.post("/users", json={"email": user.email}, headers=auth_headers)
    assert response.status_code == 409
    assert response.json()["message"] == "Email already in use"


def test_create_invalid_email(client, auth_headers):
    response = client.post("/users", json={"email": "not-an-email"}, headers=auth_headers)
    assert response.status_code == 422


def test_get_missing_user(client, auth_headers):
    response = client.get("/users/9999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_update_name_only(client, auth_headers, other_user):
    response = client.patch(
        f"/users/{other_user.id}", json={"email": "", "name": "Robert"}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["email"] == other_user.email
    assert response.json()["name"] == "Robert"


def test_update_clears_name(client, auth_headers, other_user):
    response = client.patch(f"/users/{other_user.id}", json={"name": ""}, headers=auth_headers)
    assert response.json()["name"] is None


def test_update_without_name_keeps_it(client, auth_headers, other_user):
    response = client.patch(
        f"/users/{other_user.id}", json={"email": "robert@example.com"}, headers=auth_headers
    )
    assert response.json()["email"] == "robert@example.com"
    assert response.json()["name"] == "bob"


def test_update_to_taken_email(client, auth_headers, user, other_user):
    response = client.patch(
        f"/users/{other_user.id}", json={"email": user.email}, headers=auth_headers
    )
    assert response.status_code == 409


def test_delete_user_cascades_chats(client, auth_headers, other_user, db_session):
    db_session.add(Chat(id="bobchat", user_id=other_user.id, title="t", model_id=CHAT_MODEL_ID))
    db_session.commit()

    assert client.delete(f"/users/{other_user.id}", headers=auth_headers).status_code == 204
    assert client.get(f"/users/{other_user.id}", headers=auth_headers).status_code == 404
    db_session.expire_all()
    assert db_session.get(Chat, "bobchat") is None


def test_delete_missing_user(client, auth_headers):
    assert client.delete("/users/9999", headers=auth_headers).status_code == 404


def test_stats(client, auth_headers, db_session):
    make_user(db_session, "noname@example.com", password=None)
    make_user(
        db_session,
        "old@example.com",
        name="old",
        password=None,
        created_at=datetime.now(timezone.utc) - timedelta(days=30),
    )

    response = client.get("/users/stats", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {
        "total": 3,
        "with_name": 2,
        "without_name": 1,
        "recent_count": 2,
    }


# ==================== UserRepository ====================

def test_create_account_defaults_name(db_session):
    user = UserRepository(db_session).create_account("dave@example.com", hashed_password="x")
    assert user.name == "dave"
    assert user.provider == "email"


def test_stats_empty(db_session):
    assert UserRepository(db_session).stats() == {
        "total": 0,
        "with_name": 0,
        "without_name": 0,
        "recent_count": 0,
    }
