"""
Core модуль с инфраструктурными компонентами
"""

from .constants import MAX_PASSWORD_LENGTH_BYTES, TOKEN_TYPE_BEARER
from .database import get_db_session, get_session_factory, get_sync_engine, init_db
from .error_handlers import register_error_handlers
from .exceptions import (
    AppException,
    DatabaseError,
    EmailInUseError,
    InvalidCredentialsError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from .logging_config import setup_logging

__all__ = [
    # Database
    "get_sync_engine",
    "get_session_factory",
    "get_db_session",
    "init_db",
    # Error Handlers
    "register_error_handlers",
    # Logging
    "setup_logging",
    # Exceptions
    "AppException",
    "DatabaseError",
    "EmailInUseError",
    "UnauthorizedError",
    "InvalidCredentialsError",
    "ResourceNotFoundError",
    "ResourceAlreadyExistsError",
    "ValidationError",
    # Constants
    "MAX_PASSWORD_LENGTH_BYTES",
    "TOKEN_TYPE_BEARER",
]
