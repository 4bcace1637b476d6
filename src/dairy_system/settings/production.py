import os

ENVIRONMENT = "Production"

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

# Required in production; create_app falls back to the health-only app without it.
DATABASE_URL = os.getenv("DATABASE_URL", "")

JWT_KEY = os.getenv("JWT_KEY", "please-set-JWT_KEY")
JWT_ISSUER = os.getenv("JWT_ISSUER", "dairy-system")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "dairy-system-clients")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "60"))

PORT = int(os.getenv("PORT", "5000"))

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
