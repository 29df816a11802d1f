"""Конфигурация приложения."""

import os
from dataclasses import dataclass


@dataclass
class PageConfig:
    """Конфигурация страницы Streamlit."""

    title: str
    icon: str
    layout: str = "wide"
    initial_sidebar_state: str = "expanded"


@dataclass
class AppConfig:
    """Основная конфигурация приложения."""

    # API настройки
    api_url: str = os.getenv("API_URL", "http://localhost:8000")
    api_timeout: int = 60
    # Поток ответа может идти долго; таймаут на чтение одного чанка
    stream_read_timeout: int = 300

    # Пагинация
    default_chats_limit: int = 100

    # Пароли
    min_password_length: int = 6
    max_password_length_bytes: int = 72

    # Логирование
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_format: str = "[STREAMLIT] %(asctime)s - %(message)s"


# Конфигурации страниц
PAGE_CONFIGS = {
    "main": PageConfig(
        title="Chat Workspace",
        icon="💬",
    ),
    "auth": PageConfig(
        title="Авторизация - Chat Workspace",
        icon="🔐",
        layout="centered",
        initial_sidebar_state="collapsed",
    ),
    "chat": PageConfig(
        title="Чат - Chat Workspace",
        icon="💬",
    ),
    "users": PageConfig(
        title="Пользователи - Chat Workspace",
        icon="👥",
    ),
}


# Глобальная конфигурация
app_config = AppConfig()
