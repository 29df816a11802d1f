"""
Кастомные исключения приложения

Каждое исключение несет HTTP статус и код ошибки, которые
error_handlers превращают в JSON ответ {"error", "message", "details"}.
"""

from typing import Any, Dict, Optional


class AppException(Exception):
    """Базовое исключение приложения"""

    status_code: int = 500
    error_code: str = "application_error"
    headers: Optional[Dict[str, str]] = None

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.details = details or {}
        if status_code:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Тело JSON ответа"""
        body: Dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class DatabaseError(AppException):
    """База данных недоступна или отклонила запрос"""

    status_code = 503
    error_code = "database_error"


# Auth
class UnauthorizedError(AppException):
    status_code = 401
    error_code = "unauthorized"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidCredentialsError(UnauthorizedError):
    error_code = "invalid_credentials"


# Resources
class ResourceNotFoundError(AppException):
    status_code = 404
    error_code = "not_found"

    def __init__(self, resource_type: str, resource_id: str | int):
        super().__init__(
            message=f"{resource_type} with id '{resource_id}' not found",
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class ResourceAlreadyExistsError(AppException):
    status_code = 409
    error_code = "already_exists"

    def __init__(self, resource_type: str, identifier: str, message: Optional[str] = None):
        super().__init__(
            message=message or f"{resource_type} with identifier '{identifier}' already exists",
            details={"resource_type": resource_type, "identifier": identifier},
        )


class EmailInUseError(ResourceAlreadyExistsError):
    def __init__(self, email: str):
        super().__init__("User", email, message="Email already in use")


class ValidationError(AppException):
    """Ошибка валидации данных (400)"""

    status_code = 400
    error_code = "validation_error"
