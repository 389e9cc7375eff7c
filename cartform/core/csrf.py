import hashlib
import hmac
import logging
import secrets

from fastapi import Request

from cartform.core.config import Settings, settings

logger = logging.getLogger(__name__)


class CsrfTokenManager:
    """
    Double-submit CSRF tokens.

    The browser holds a random cookie value; the form carries
    HMAC-SHA256(secret, "<token_id>:<cookie>"). Both must arrive together.
    """

    def __init__(self, secret: str, cookie_name: str, enabled: bool = True):
        self.secret = secret.encode("utf-8")
        self.cookie_name = cookie_name
        self.enabled = enabled

    def new_cookie_value(self) -> str:
        return secrets.token_urlsafe(32)

    def token_for(self, token_id: str, cookie_value: str) -> str:
        msg = f"{token_id}:{cookie_value}".encode("utf-8")
        return hmac.new(self.secret, msg, hashlib.sha256).hexdigest()

    def is_valid(self, token_id: str, cookie_value: str | None, submitted: str | None) -> bool:
        if not self.enabled:
            return True
        if not cookie_value or not submitted or not isinstance(submitted, str):
            logger.warning("CSRF check failed for %s: missing cookie or token", token_id)
            return False

        # issued tokens are hex; compare_digest refuses non-ASCII str
        if not submitted.isascii():
            logger.warning("CSRF check failed for %s: malformed token", token_id)
            return False

        expected = self.token_for(token_id, cookie_value)
        if not hmac.compare_digest(expected, submitted):
            logger.warning("CSRF check failed for %s: token mismatch", token_id)
            return False
        return True

    def cookie_from(self, request: Request) -> tuple[str, bool]:
        """
        Returns (cookie_value, is_new). A new value must be set on the response.
        """
        existing = request.cookies.get(self.cookie_name)
        if existing:
            return existing, False
        return self.new_cookie_value(), True


def build_csrf_manager(cfg: Settings) -> CsrfTokenManager:
    return CsrfTokenManager(
        secret=cfg.SECRET_KEY,
        cookie_name=cfg.CSRF_COOKIE_NAME,
        enabled=cfg.CSRF_ENABLED,
    )


def get_csrf_manager() -> CsrfTokenManager:
    return build_csrf_manager(settings)
