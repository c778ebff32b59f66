"""
Post Password Use Case

Remembers the password a visitor typed for a password protected post.
"""

from urllib.parse import urlsplit

from .base import ActionContext, ActionUseCase


class PostPasswordUseCase(ActionUseCase):
    """
    Business Rules:
    - The cookie holds a hash of the submitted password, never the password
    - Cookie lifetime is post_password_ttl; 0 makes it a browser-session cookie
    - The cookie is secure only when the referring page was https
    """

    async def execute(self, ctx: ActionContext):
        request = ctx.request
        referer = self.services.redirects.validate(request.referer or "", "")

        password = request.form.get("post_password")
        if password is None:
            return self.safe_redirect(referer)

        ttl = self.settings.post_password_ttl
        expires = self.services.clock() + ttl if ttl > 0 else None
        secure = bool(referer) and urlsplit(referer).scheme == "https"

        ctx.response.set_cookie(
            self.services.cookie_names.post_pass,
            self.services.hasher.hash(password),
            expires=expires,
            path=self.settings.cookie_path,
            secure=secure,
        )
        return self.safe_redirect(referer)
