"""
Dependencies для эндпоинтов
"""

from typing import Optional

from fastapi import Request


def get_user_id_from_request(request: Request) -> Optional[int]:
    """
    Получает ID текущего пользователя из request.state.
    ID добавляется в state middleware'ом AuthMiddleware.

    Args:
        request: HTTP запрос

    Returns:
        ID пользователя или None
    """
    return getattr(request.state, "user_id", None)
