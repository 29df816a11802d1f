"""
Централизованная конфигурация приложения
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Настройки приложения с валидацией через Pydantic"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Database
    database_endpoint: str = "sqlite:///./chat_workspace.db"

    # LLM gateway (OpenAI-совместимый)
    ai_gateway_api_key: str = ""
    ai_gateway_base_url: str = "https://ark.cn-beijing.volces.com/api/v3"
    # JSON-массив моделей, заменяет список по умолчанию
    models_config: Optional[str] = None
    default_model_id: Optional[str] = None
    title_model_name: str = "Doubao-lite-32k"

    # Security
    auth_secret_key: str = "change-me"
    auth_algorithm: str = "HS256"
    auth_access_token_expire_days: int = 30
    require_auth: bool = True

    # CORS
    cors_allowed_origins: str = "http://localhost:8501,http://localhost:3000"

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False
    log_file: Optional[str] = None


@lru_cache()
def get_settings() -> Settings:
    """Возвращает синглтон настроек"""
    return Settings()
