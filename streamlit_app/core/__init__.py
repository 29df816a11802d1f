"""Модуль core для работы с аутентификацией и сессиями."""

from core.auth import (
    get_api_client,
    login_session,
    logout,
    require_authentication,
    validate_password_length,
)
from core.session import (
    check_authentication,
    clear_session_state,
    init_session_state,
    reset_chat_state,
)

__all__ = [
    # auth
    "get_api_client",
    "login_session",
    "logout",
    "require_authentication",
    "validate_password_length",
    # session
    "check_authentication",
    "clear_session_state",
    "init_session_state",
    "reset_chat_state",
]
