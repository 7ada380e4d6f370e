"""Application-wide constants.

Field bounds shared by the ORM models, the validation schemas and the
HTML forms.
"""

# Tenant
MIN_TENANT_NAME_LENGTH = 2
MAX_TENANT_NAME_LENGTH = 100
MIN_SLUG_LENGTH = 2
MAX_SLUG_LENGTH = 50
SLUG_PATTERN = r"^[a-z0-9-]+$"
MAX_DOMAIN_LENGTH = 253
HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"

# Tenant config defaults
DEFAULT_PRIMARY_COLOR = "#6366f1"
DEFAULT_SECONDARY_COLOR = "#8b5cf6"
DEFAULT_ALLOW_REGISTRATION = True
DEFAULT_MAX_TASKS_PER_USER = 100
DEFAULT_ALLOW_TASK_COMMENTS = True
MIN_TASKS_PER_USER = 1
MAX_TASKS_PER_USER = 1000

# Task
MIN_TITLE_LENGTH = 1
MAX_TITLE_LENGTH = 100
MAX_TASK_DESCRIPTION_LENGTH = 500

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_URL_LENGTH = 2048
MAX_PHONE_LENGTH = 50

# Password hashing
BCRYPT_ROUNDS = 12

# First path segments that never identify a tenant
RESERVED_PATH_SEGMENTS = frozenset({"admin"})

# Slugs a tenant may not take: reserved segments plus top-level routes
RESERVED_SLUGS = RESERVED_PATH_SEGMENTS | frozenset(
    {"tasks", "health", "info", "auth", "docs", "redoc"}
)
