"""Константы приложения."""

from typing import Final

# ===== HTTP STATUS CODES =====
HTTP_OK: Final[int] = 200
HTTP_CREATED: Final[int] = 201
HTTP_NO_CONTENT: Final[int] = 204

# ===== SESSION STATE KEYS =====
SESSION_AUTHENTICATED: Final[str] = "authenticated"
SESSION_TOKEN: Final[str] = "token"
SESSION_USER_INFO: Final[str] = "user_info"
SESSION_MESSAGES: Final[str] = "messages"
SESSION_CHAT_ID: Final[str] = "chat_id"
SESSION_MODEL_ID: Final[str] = "model_id"
SESSION_MESSAGES_LOADED: Final[str] = "messages_loaded"
SESSION_STREAM_ERROR: Final[str] = "stream_error"
SESSION_PENDING_RETRY: Final[str] = "pending_retry"

# ===== PASSWORD VALIDATION =====
MIN_PASSWORD_LENGTH: Final[int] = 6
MAX_PASSWORD_LENGTH_BYTES: Final[int] = 72

# ===== TIMEOUTS =====
DEFAULT_API_TIMEOUT: Final[int] = 60
HEALTH_CHECK_TIMEOUT: Final[int] = 5

# ===== UI STREAM =====
STREAM_DATA_PREFIX: Final[str] = "data:"
STREAM_DONE_MARKER: Final[str] = "[DONE]"
STREAM_EVENT_TEXT_DELTA: Final[str] = "text-delta"
STREAM_EVENT_START: Final[str] = "start"
STREAM_EVENT_ERROR: Final[str] = "error"

# ===== UI MESSAGES =====
MSG_LOGIN_SUCCESS: Final[str] = "✅ Добро пожаловать, {email}!"
MSG_LOGIN_ERROR: Final[str] = "❌ Неверный email или пароль"
MSG_REGISTER_SUCCESS: Final[str] = "✅ Аккаунт создан! Добро пожаловать, {email}!"
MSG_REGISTER_ERROR: Final[str] = "❌ Ошибка регистрации. Возможно, email уже используется"
MSG_EMPTY_FIELDS: Final[str] = "❌ Заполните все поля"
MSG_PASSWORDS_MISMATCH: Final[str] = "❌ Пароли не совпадают"
MSG_CHAT_CREATE_ERROR: Final[str] = "Не удалось создать чат"
MSG_CHATS_LOAD_ERROR: Final[str] = "Не удалось загрузить список чатов"
MSG_NO_CHATS_YET: Final[str] = "У вас пока нет чатов. Создайте новый!"
MSG_NO_MODELS: Final[str] = "Нет доступных моделей"
MSG_STREAM_ERROR: Final[str] = "❌ Ошибка генерации ответа: {error}"
MSG_MESSAGE_DELETE_ERROR: Final[str] = "Не удалось удалить сообщение"
MSG_MODEL_SAVE_ERROR: Final[str] = "❌ Не удалось сохранить модель: {error}"
MSG_MODEL_REQUIRED_FIELDS: Final[str] = "❌ Укажите ID, название и Base URL"
MSG_MODEL_DELETE_ERROR: Final[str] = "❌ Не удалось удалить модель"
MSG_USERS_LOAD_ERROR: Final[str] = "Не удалось загрузить пользователей"
MSG_EMAIL_IN_USE: Final[str] = "❌ Email уже используется"

# ===== ROLES =====
ROLE_USER: Final[str] = "user"
ROLE_ASSISTANT: Final[str] = "assistant"

# ===== DEFAULT CHAT TITLE =====
DEFAULT_CHAT_TITLE: Final[str] = "Новый чат"

# ===== API ENDPOINTS =====
ENDPOINT_HEALTH: Final[str] = "/health"
ENDPOINT_AUTH_REGISTER: Final[str] = "/auth/register"
ENDPOINT_AUTH_LOGIN: Final[str] = "/auth/login"
ENDPOINT_AUTH_LOGOUT: Final[str] = "/auth/logout"
ENDPOINT_AUTH_ME: Final[str] = "/auth/me"
ENDPOINT_CHATS: Final[str] = "/chats"
ENDPOINT_CHAT_STREAM: Final[str] = "/api/chat"
ENDPOINT_CHAT_TITLE: Final[str] = "/api/chat/title"
ENDPOINT_MODELS: Final[str] = "/models"
ENDPOINT_USERS: Final[str] = "/users"
