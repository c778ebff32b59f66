"""
Cookie names used by the login flow.

Every name except the test cookie and the language cookie carries the
site specific cookie hash so two sites on one domain never collide.
"""

TEST_COOKIE = "wordpress_test_cookie"
TEST_COOKIE_VALUE = "WP Cookie check"
LANG_COOKIE = "wp_lang"


class CookieNames:
    def __init__(self, cookie_hash: str):
        self.cookie_hash = cookie_hash

    @property
    def auth(self) -> str:
        return f"wordpress_{self.cookie_hash}"

    @property
    def secure_auth(self) -> str:
        return f"wordpress_sec_{self.cookie_hash}"

    @property
    def logged_in(self) -> str:
        return f"wordpress_logged_in_{self.cookie_hash}"

    @property
    def reset_pass(self) -> str:
        return f"wp-resetpass-{self.cookie_hash}"

    @property
    def post_pass(self) -> str:
        return f"wp-postpass_{self.cookie_hash}"

    @property
    def recovery_mode(self) -> str:
        return f"wp_recovery_mode_{self.cookie_hash}"
