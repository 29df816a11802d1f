"""
Модуль server с эндпоинтами FastAPI
"""

from .ai_endpoints import router as ai_router
from .auth_endpoints import router as auth_router
from .chat_endpoints import router as chat_router
from .dependencies import get_user_id_from_request
from .endpoints import router
from .logging_middleware import RequestLoggingMiddleware
from .middleware import AuthMiddleware
from .model_endpoints import router as model_router
from .user_endpoints import router as user_router

__all__ = [
    "router",
    "auth_router",
    "chat_router",
    "ai_router",
    "model_router",
    "user_router",
    "AuthMiddleware",
    "RequestLoggingMiddleware",
    "get_user_id_from_request",
]
