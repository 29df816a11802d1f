"""Утилиты для работы с сессиями Streamlit."""

import logging
from typing import Any, Dict

import streamlit as st

from constants import (
    SESSION_AUTHENTICATED,
    SESSION_CHAT_ID,
    SESSION_MESSAGES,
    SESSION_MESSAGES_LOADED,
    SESSION_MODEL_ID,
    SESSION_PENDING_RETRY,
    SESSION_STREAM_ERROR,
    SESSION_TOKEN,
    SESSION_USER_INFO,
)

logger = logging.getLogger(__name__)


def _defaults() -> Dict[str, Any]:
    return {
        SESSION_AUTHENTICATED: False,
        SESSION_TOKEN: None,
        SESSION_USER_INFO: None,
        SESSION_MESSAGES: [],
        SESSION_CHAT_ID: None,
        SESSION_MODEL_ID: None,
        SESSION_MESSAGES_LOADED: False,
        SESSION_STREAM_ERROR: None,
        SESSION_PENDING_RETRY: False,
    }


def init_session_state() -> None:
    """Инициализация session state с значениями по умолчанию."""
    for key, value in _defaults().items():
        if key not in st.session_state:
            st.session_state[key] = value


def check_authentication() -> bool:
    """
    Проверка авторизации пользователя.

    Returns:
        True если пользователь авторизован, иначе False
    """
    return st.session_state.get(SESSION_AUTHENTICATED, False)


def reset_chat_state() -> None:
    """Сброс текущего чата (новый чат)"""
    st.session_state[SESSION_MESSAGES] = []
    st.session_state[SESSION_CHAT_ID] = None
    st.session_state[SESSION_MESSAGES_LOADED] = False
    st.session_state[SESSION_STREAM_ERROR] = None
    st.session_state[SESSION_PENDING_RETRY] = False


def clear_session_state() -> None:
    """Очистка session state (logout)."""
    logger.info("Clearing session state")
    for key, value in _defaults().items():
        st.session_state[key] = value
