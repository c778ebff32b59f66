import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()

DAY_IN_SECONDS = 24 * 60 * 60


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./loginflow.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    SITE_URL = data.get("SITE_URL", "http://localhost:8000")
    ALLOWED_REDIRECT_HOSTS = data.get("ALLOWED_REDIRECT_HOSTS", [])
    AUTH_SECRET = data.get("AUTH_SECRET", "dev-secret-key-change-in-production")
    LOGIN_PATH = data.get("LOGIN_PATH", API_PREFIX + "/wp-login.php")
    COOKIE_PATH = data.get("COOKIE_PATH", "/")
    ADMIN_COOKIE_PATH = data.get("ADMIN_COOKIE_PATH", "/wp-admin")
    FORCE_SSL_ADMIN = bool(data.get("FORCE_SSL_ADMIN", False))

    USERS_CAN_REGISTER = bool(data.get("USERS_CAN_REGISTER", False))
    DEFAULT_CAPABILITIES = data.get("DEFAULT_CAPABILITIES", ["read"])

    RESET_KEY_TTL = data.get("RESET_KEY_TTL", DAY_IN_SECONDS)
    SESSION_TTL = data.get("SESSION_TTL", 2 * DAY_IN_SECONDS)
    REMEMBER_TTL = data.get("REMEMBER_TTL", 14 * DAY_IN_SECONDS)
    POST_PASSWORD_TTL = data.get("POST_PASSWORD_TTL", 10 * DAY_IN_SECONDS)
    NONCE_LIFE = data.get("NONCE_LIFE", DAY_IN_SECONDS)
    ADMIN_EMAIL_CHECK_INTERVAL = data.get("ADMIN_EMAIL_CHECK_INTERVAL", 180 * DAY_IN_SECONDS)
    ADMIN_EMAIL_REMIND_INTERVAL = data.get("ADMIN_EMAIL_REMIND_INTERVAL", 3 * DAY_IN_SECONDS)
    RECOVERY_KEY_TTL = data.get("RECOVERY_KEY_TTL", DAY_IN_SECONDS)
    USER_REQUEST_KEY_TTL = data.get("USER_REQUEST_KEY_TTL", DAY_IN_SECONDS)

    BCRYPT_ROUNDS = data.get("BCRYPT_ROUNDS", 12)
