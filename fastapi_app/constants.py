"""
Константы приложения
"""

# Chat constants
DEFAULT_CHAT_TITLE = "Новый чат"
DEFAULT_CHAT_LIST_LIMIT = 100
CHAT_ID_LENGTH = 10
MAX_TITLE_LENGTH = 20

# Title generation
TITLE_MAX_OUTPUT_TOKENS = 32
TITLE_TEMPERATURE = 0.3

# User management
RECENT_USERS_DAYS = 7
PROVIDER_EMAIL = "email"
PROVIDER_ADMIN = "admin"

# UI message stream
UI_STREAM_HEADER = "x-vercel-ai-ui-message-stream"
UI_STREAM_VERSION = "v1"
STREAM_DONE_MARKER = "[DONE]"

# HTTP Status Messages
STATUS_HEALTHY = "healthy"
STATUS_DEGRADED = "degraded"
STATUS_DISCONNECTED = "disconnected"
STATUS_CONNECTED = "connected"

# Service names
SERVICE_NAME = "Chat Workspace"
SERVICE_VERSION = "1.0.0"

# Resource types for exceptions
RESOURCE_USER = "User"
RESOURCE_CHAT = "Chat"
RESOURCE_MESSAGE = "Message"
RESOURCE_MODEL = "Model"
