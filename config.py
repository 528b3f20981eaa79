import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _setting(key, default=None):
    # Environment wins over env.yaml so secrets can stay out of the file
    return os.environ.get(key, data.get(key, default))


def _flag(key, default=False) -> bool:
    value = _setting(key, default)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class ApplicationConfig:
    DB_URI = _setting("DB_URI", "sqlite+aiosqlite:///./authkit.db")
    API_PREFIX = _setting("API_PREFIX", "")
    API_PORT = int(_setting("API_PORT", 8000))
    API_HOST = _setting("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = _flag("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = _setting("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = _flag("ENABLE_LOGGING_MIDDLEWARE", True)
    CREATE_TABLES_ON_STARTUP = _flag("CREATE_TABLES_ON_STARTUP", True)

    # Session tokens
    JWT_SECRET_KEY = _setting("JWT_SECRET_KEY", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = _setting("JWT_ALGORITHM", "HS256")
    JWT_TTL_HOURS = int(_setting("JWT_TTL_HOURS", 24))

    # Passwords and reset
    BCRYPT_ROUNDS = int(_setting("BCRYPT_ROUNDS", 12))
    PASSWORD_RESET_TTL_HOURS = int(_setting("PASSWORD_RESET_TTL_HOURS", 6))
    PASSWORD_RESET_URL = _setting(
        "PASSWORD_RESET_URL", "http://localhost:3000/reset-password?token={token}"
    )
    PASSWORD_RESET_REVEAL_UNKNOWN_EMAIL = _flag("PASSWORD_RESET_REVEAL_UNKNOWN_EMAIL", False)

    # Mail delivery (disabled when SMTP_HOST is empty)
    SMTP_HOST = _setting("SMTP_HOST", "")
    SMTP_PORT = int(_setting("SMTP_PORT", 587))
    SMTP_USERNAME = _setting("SMTP_USERNAME", "")
    SMTP_PASSWORD = _setting("SMTP_PASSWORD", "")
    MAIL_FROM = _setting("MAIL_FROM", "no-reply@authkit.local")

    ADMIN_API_KEY = _setting("ADMIN_API_KEY", "test-admin-key-12345")
