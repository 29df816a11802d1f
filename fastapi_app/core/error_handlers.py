"""
Централизованная обработка ошибок для FastAPI приложения
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .exceptions import AppException

logger = logging.getLogger(__name__)


def _log_level(status_code: int) -> int:
    return logging.ERROR if status_code >= 500 else logging.WARNING


def register_error_handlers(app: FastAPI) -> None:
    """
    Регистрирует обработчики ошибок для FastAPI приложения.

    Args:
        app: FastAPI приложение
    """

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Исключения приложения: статус и код берутся из класса"""
        logger.log(
            _log_level(exc.status_code),
            f"{exc.__class__.__name__}: {exc.message}",
            extra={"path": request.url.path, "error_code": exc.error_code, **exc.details},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Обработка всех необработанных исключений"""
        logger.error(f"Unhandled exception: {exc}", extra={"path": request.url.path}, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "internal_error",
                "message": "An internal server error occurred",
            },
        )
