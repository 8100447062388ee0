"""Order report session issuance.

A session is nothing but a cookie. Without a configured secret the cookie
holds the literal sentinel ``"authenticated"``. With ``SESSION_SECRET`` set
the value is ``"<issued_at>.<hmac>"`` signed with HMAC-SHA256 and expires
after the cookie max age.

Failed logins can be counted per client key; once the limit is reached the
key is locked out until the window ends.
"""

import hashlib
import hmac
import re
import time
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Response

from tax_invoice_api.config import constants
from tax_invoice_api.core.credentials import CredentialStore
from tax_invoice_api.core.exceptions import (
    AuthenticationError,
    RateLimitError,
    ValidationError,
)
from tax_invoice_api.core.logger import setup_logger
from tax_invoice_api.core.rate_limiter import FixedWindowRateLimiter

logger = setup_logger(__name__)

# "<unix seconds>.<hex hmac-sha256>"
SIGNED_COOKIE_RE = re.compile(r"([0-9]{1,12})\.([0-9a-f]{64})")


@dataclass(frozen=True)
class SessionCookie:
    """Cookie the caller must set on the response."""

    value: str
    max_age: int
    secure: bool
    name: str = constants.SESSION_COOKIE_NAME
    path: str = constants.SESSION_COOKIE_PATH
    http_only: bool = True
    same_site: str = constants.SESSION_COOKIE_SAMESITE

    def apply(self, response: Response) -> None:
        """Write this cookie onto a response."""
        response.set_cookie(
            key=self.name,
            value=self.value,
            max_age=self.max_age,
            path=self.path,
            secure=self.secure,
            httponly=self.http_only,
            samesite=self.same_site,
        )


class SessionIssuer:
    """Validates credentials and issues or clears the session cookie."""

    def __init__(
        self,
        credential_store: CredentialStore,
        secure: bool = False,
        secret: Optional[str] = None,
        lockout: Optional[FixedWindowRateLimiter] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            credential_store: Source of valid email/password pairs
            secure: Set the Secure attribute (production)
            secret: HMAC key for signed cookies (None = sentinel cookie)
            lockout: Counter of failed attempts per client key (None = no lockout)
            clock: Wall clock in seconds, used for signed cookie expiry
        """
        self.credential_store = credential_store
        self.secure = secure
        self.secret = secret
        self.lockout = lockout
        self.clock = clock

    def login(self, email: Optional[str], password: Optional[str], client_key: str = constants.UNKNOWN_CLIENT_KEY) -> SessionCookie:
        """
        Check credentials and issue a session cookie.

        Checks run in order: configuration, input, lockout, credentials.
        Each attempt with a non-empty email and password counts toward the
        lockout; a successful login clears the count.

        Raises:
            ConfigurationError: Credential configuration is missing or invalid
            ValidationError: Email or password is empty
            RateLimitError: Client key is locked out after repeated failures
            AuthenticationError: Credentials did not match
        """
        self.credential_store.load()

        if not email or not email.strip() or not password:
            raise ValidationError(constants.MSG_MISSING_CREDENTIALS)

        # Counted up front in one atomic step so concurrent attempts cannot overshoot
        if self.lockout is not None and not self.lockout.allow(client_key):
            logger.warning(f"Login blocked for locked out client key={client_key}")
            raise RateLimitError(
                constants.MSG_LOGIN_LOCKED,
                retry_after=self.lockout.retry_after_seconds(client_key),
            )

        if not self.credential_store.is_valid(email, password):
            logger.warning(f"Failed order report login from client key={client_key}")
            raise AuthenticationError(constants.MSG_INVALID_CREDENTIALS)

        if self.lockout is not None:
            self.lockout.reset(client_key)

        logger.info(f"Order report login succeeded from client key={client_key}")
        return SessionCookie(
            value=self._issue_value(),
            max_age=constants.SESSION_MAX_AGE_SECONDS,
            secure=self.secure,
        )

    def check_session(self, cookie_value: Optional[str]) -> bool:
        """True when the cookie value proves a live session."""
        if not cookie_value:
            return False
        if not self.secret:
            return cookie_value == constants.SESSION_SENTINEL
        return self._verify_signed(cookie_value)

    def logout(self) -> SessionCookie:
        """Cookie that overwrites and immediately expires the session."""
        return SessionCookie(value="", max_age=0, secure=self.secure)

    def _issue_value(self) -> str:
        if not self.secret:
            return constants.SESSION_SENTINEL
        issued_at = str(int(self.clock()))
        return f"{issued_at}.{self._sign(issued_at)}"

    def _sign(self, issued_at: str) -> str:
        message = f"{constants.SESSION_SENTINEL}|{issued_at}"
        return hmac.new(
            self.secret.encode("utf-8"),
            message.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    def _verify_signed(self, cookie_value: str) -> bool:
        match = SIGNED_COOKIE_RE.fullmatch(cookie_value)
        if match is None:
            return False
        issued_at, signature = match.groups()

        if not hmac.compare_digest(self._sign(issued_at), signature):
            logger.warning("Rejected session cookie with invalid signature")
            return False

        age = self.clock() - int(issued_at)
        return 0 <= age <= constants.SESSION_MAX_AGE_SECONDS
