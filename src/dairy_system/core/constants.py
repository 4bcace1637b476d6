"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

APP_VERSION = "1.0.0"

# Single built-in account, checked literally.
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"

DEFAULT_PORT = 5000
DEFAULT_LIST_LIMIT = 500
DEFAULT_AUDIT_LIMIT = 100
DEFAULT_SESSION_DAYS = 7

DB_SCHEMA = "dairy"
