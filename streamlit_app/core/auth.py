"""Утилиты для аутентификации и валидации."""

import logging
from typing import Optional

import streamlit as st

from api_client import APIClient
from constants import (
    MAX_PASSWORD_LENGTH_BYTES,
    MIN_PASSWORD_LENGTH,
    SESSION_AUTHENTICATED,
    SESSION_TOKEN,
    SESSION_USER_INFO,
)
from core.session import check_authentication, clear_session_state

logger = logging.getLogger(__name__)


def validate_password_length(password: str) -> Optional[str]:
    """
    Валидация пароля: длина и наличие хотя бы одной заглавной буквы.

    Args:
        password: Пароль для валидации

    Returns:
        Сообщение об ошибке (на русском) или None если всё ок
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Пароль должен быть минимум {MIN_PASSWORD_LENGTH} символов"

    if len(password.encode("utf-8")) > MAX_PASSWORD_LENGTH_BYTES:
        return f"Пароль не может быть длиннее {MAX_PASSWORD_LENGTH_BYTES} байт"

    if not any(ch.isupper() for ch in password):
        return "Пароль должен содержать хотя бы одну заглавную букву"

    return None


def login_session(result: dict) -> None:
    """Сохраняет токен и пользователя из ответа login/register"""
    st.session_state[SESSION_AUTHENTICATED] = True
    st.session_state[SESSION_TOKEN] = result["access_token"]
    st.session_state[SESSION_USER_INFO] = result["user"]
    logger.info(f"User logged in: {result['user'].get('email')}")


def logout() -> None:
    """Выход из системы и очистка session state."""
    client = get_api_client()
    if client.token:
        client.logout()
    logger.info("User logged out")
    clear_session_state()


def require_authentication() -> None:
    """Требует авторизацию, иначе перенаправляет на страницу входа."""
    if check_authentication():
        return
    st.switch_page("pages/1_auth.py")


def get_api_client() -> APIClient:
    """
    Получить API клиент с установленным токеном.

    Returns:
        Настроенный API клиент
    """
    client = APIClient()
    if st.session_state.get(SESSION_TOKEN):
        client.set_token(st.session_state[SESSION_TOKEN])
    return client
