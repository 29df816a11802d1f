"""
FastAPI приложение чат-ассистента с историей и админ-панелью
"""

import logging
from contextlib import asynccontextmanager

from config import get_settings
from constants import SERVICE_NAME, SERVICE_VERSION, UI_STREAM_HEADER
from core import init_db, register_error_handlers, setup_logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from server import (
    AuthMiddleware,
    RequestLoggingMiddleware,
    ai_router,
    auth_router,
    chat_router,
    model_router,
    router,
    user_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"{SERVICE_NAME} {SERVICE_VERSION} started")
    yield
    logger.info(f"{SERVICE_NAME} stopped")


def create_app() -> FastAPI:
    """
    Создает и настраивает FastAPI приложение.
    """
    settings = get_settings()
    setup_logging(level=settings.log_level, json_logs=settings.json_logs, log_file=settings.log_file)

    app = FastAPI(
        title=f"{SERVICE_NAME} API",
        description="API чата с LLM: потоковые ответы, история чатов, модели и пользователи",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )

    # Порядок важен: добавленный последним middleware выполняется первым
    app.add_middleware(AuthMiddleware, require_auth=settings.require_auth)
    app.add_middleware(RequestLoggingMiddleware)

    # CORS - самый внешний слой, включая ответы 401
    allowed_origins = [origin.strip() for origin in settings.cors_allowed_origins.split(",") if origin.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[UI_STREAM_HEADER, "X-Request-ID"],
    )

    register_error_handlers(app)

    app.include_router(router)
    app.include_router(auth_router)
    app.include_router(chat_router)
    app.include_router(ai_router)
    app.include_router(model_router)
    app.include_router(user_router)

    return app


# Создаем приложение
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
