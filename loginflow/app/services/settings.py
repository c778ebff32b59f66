"""
Login flow settings.

Plain values the dispatcher and its services need, lifted out of
ApplicationConfig so tests can build them without an env.yaml.
"""

import hashlib
import time
from typing import Callable, List
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field

DAY_IN_SECONDS = 24 * 60 * 60
MONTH_IN_SECONDS = 30 * DAY_IN_SECONDS


def unix_now() -> int:
    return int(time.time())


class LoginSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    site_url: str = "http://localhost:8000"
    allowed_redirect_hosts: List[str] = Field(default_factory=list)
    auth_secret: str = "dev-secret-key-change-in-production"

    login_path: str = "/wp-login.php"
    cookie_path: str = "/"
    admin_cookie_path: str = "/wp-admin"
    force_ssl_admin: bool = False

    users_can_register: bool = False
    default_capabilities: List[str] = Field(default_factory=lambda: ["read"])

    reset_key_ttl: int = DAY_IN_SECONDS
    session_ttl: int = 2 * DAY_IN_SECONDS
    remember_ttl: int = 14 * DAY_IN_SECONDS
    post_password_ttl: int = 10 * DAY_IN_SECONDS
    nonce_life: int = DAY_IN_SECONDS
    admin_email_check_interval: int = 6 * MONTH_IN_SECONDS
    admin_email_remind_interval: int = 3 * DAY_IN_SECONDS
    recovery_key_ttl: int = DAY_IN_SECONDS
    user_request_key_ttl: int = DAY_IN_SECONDS

    @classmethod
    def from_config(cls, config) -> "LoginSettings":
        return cls(
            site_url=config.SITE_URL,
            allowed_redirect_hosts=config.ALLOWED_REDIRECT_HOSTS,
            auth_secret=config.AUTH_SECRET,
            login_path=config.LOGIN_PATH,
            cookie_path=config.COOKIE_PATH,
            admin_cookie_path=config.ADMIN_COOKIE_PATH,
            force_ssl_admin=config.FORCE_SSL_ADMIN,
            users_can_register=config.USERS_CAN_REGISTER,
            default_capabilities=config.DEFAULT_CAPABILITIES,
            reset_key_ttl=config.RESET_KEY_TTL,
            session_ttl=config.SESSION_TTL,
            remember_ttl=config.REMEMBER_TTL,
            post_password_ttl=config.POST_PASSWORD_TTL,
            nonce_life=config.NONCE_LIFE,
            admin_email_check_interval=config.ADMIN_EMAIL_CHECK_INTERVAL,
            admin_email_remind_interval=config.ADMIN_EMAIL_REMIND_INTERVAL,
            recovery_key_ttl=config.RECOVERY_KEY_TTL,
            user_request_key_ttl=config.USER_REQUEST_KEY_TTL,
        )

    @property
    def cookie_hash(self) -> str:
        """Site specific suffix shared by every cookie name"""
        return hashlib.md5(self.site_url.encode()).hexdigest()

    @property
    def site_host(self) -> str:
        return (urlsplit(self.site_url).hostname or "").lower()

    def site(self, path: str = "") -> str:
        return self.site_url.rstrip("/") + "/" + path.lstrip("/")

    def login_url(self) -> str:
        return self.site(self.login_path)

    def admin_url(self, path: str = "") -> str:
        return self.site(self.admin_cookie_path.strip("/") + "/" + path.lstrip("/"))

    def home_url(self) -> str:
        return self.site("/")


Clock = Callable[[], int]
