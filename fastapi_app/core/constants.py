"""
Константы инфраструктурного слоя
"""

# Authentication
MAX_PASSWORD_LENGTH_BYTES = 72  # Ограничение bcrypt
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH_CHARS = 100
MIN_EMAIL_LENGTH = 3
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

# JWT
TOKEN_TYPE_BEARER = "bearer"

# Database
DEFAULT_POOL_SIZE = 10
DEFAULT_MAX_OVERFLOW = 20
DEFAULT_POOL_RECYCLE_SECONDS = 3600

# LLM
LLM_RETRY_ATTEMPTS = 3
LLM_TIMEOUT_SECONDS = 60

