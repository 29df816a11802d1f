"""
Middleware для проверки авторизации
"""

import logging
from typing import Optional

from core.auth import token_user_id
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware для проверки авторизации по токену.
    Проверяет подпись и срок Bearer токена для всех эндпоинтов,
    кроме публичных (health, docs, auth endpoints). Загрузка пользователя
    из БД выполняется dependency get_current_user.
    """

    # Публичные пути, не требующие авторизации
    PUBLIC_PATHS = {
        "/health",
        "/docs",
        "/redoc",
        "/openapi.json",
        "/auth/register",
        "/auth/login",
    }

    # Префиксы публичных путей
    PUBLIC_PREFIXES = (
        "/docs",
        "/redoc",
    )

    def __init__(self, app, require_auth: bool = True):
        """
        Args:
            app: FastAPI приложение
            require_auth: Требовать ли авторизацию (можно отключить для разработки)
        """
        super().__init__(app)
        self.require_auth = require_auth

    async def dispatch(self, request: Request, call_next):
        if (
            request.method == "OPTIONS"
            or self._is_public_path(request.url.path)
            or not self.require_auth
        ):
            return await call_next(request)

        token = self._extract_token(request)
        if not token:
            return self._unauthorized("Missing authorization token")

        user_id = token_user_id(token)
        if user_id is None:
            return self._unauthorized("Invalid or expired token")

        request.state.user_id = user_id
        logger.debug(f"Authenticated request for user_id={user_id}")

        # Ошибки из endpoint'ов обрабатываются глобальными error handlers
        return await call_next(request)

    @staticmethod
    def _unauthorized(message: str) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "unauthorized", "message": message},
            headers={"WWW-Authenticate": "Bearer"},
        )

    def _is_public_path(self, path: str) -> bool:
        """
        Проверяет, является ли путь публичным.

        Args:
            path: Путь запроса

        Returns:
            True если путь публичный, иначе False
        """
        return path in self.PUBLIC_PATHS or path.startswith(self.PUBLIC_PREFIXES)

    def _extract_token(self, request: Request) -> Optional[str]:
        """
        Извлекает Bearer токен из заголовка Authorization.

        Returns:
            Токен или None если токен не найден
        """
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            return None
        return parts[1]
