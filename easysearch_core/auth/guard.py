"""Access guard for protected requests.

Verifies the bearer access token and the current status of the user it
names. Only ACTIVE users pass. Every failure after "no token" surfaces as
the same UnauthorizedError("Unauthorized").
"""

import logging

from ..exceptions import UnauthorizedError
from ..schema.types import UserStatus
from .result import AuthFailure, Verdict
from .schemas import TokenPayload
from .store import CredentialStore
from .token import TokenInvalid, TokenSigner

logger = logging.getLogger(__name__)


def extract_token(authorization: str | None) -> str | None:
    """Pull the token out of an Authorization header value.

    Accepts "Bearer <token>" (scheme is case-insensitive) and a bare token.
    A "Bearer" scheme with nothing after it carries no token.
    """
    if not authorization:
        return None
    value = authorization.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer":
        value = rest.strip()
    return value or None


class AccessGuard:
    """Request-time authorization check."""

    def __init__(self, store: CredentialStore, access_signer: TokenSigner):
        self.store = store
        self.access_signer = access_signer

    def check(self, token: str | None) -> Verdict:
        if not token:
            return Verdict.reject(AuthFailure.NO_TOKEN)

        try:
            payload = self.access_signer.verify(token)
        except TokenInvalid as e:
            return Verdict.reject(e.reason)

        user = self.store.find_user_by_id(payload.sub)
        if user is None:
            return Verdict.reject(AuthFailure.USER_NOT_FOUND)
        if user.status in (UserStatus.BLOCKED, UserStatus.INACTIVE):
            return Verdict.reject(AuthFailure.USER_INACTIVE)

        return Verdict.accept(payload)

    def authenticate(self, authorization: str | None) -> TokenPayload:
        """Verify an Authorization header value.

        Returns:
            Verified token payload (sub, role, ...)

        Raises:
            UnauthorizedError: "No token provided" when absent, otherwise
                "Unauthorized" whatever check failed
        """
        token = extract_token(authorization)
        if token is None:
            raise UnauthorizedError("No token provided")

        try:
            verdict = self.check(token)
        except Exception:
            logger.exception("Access guard failed unexpectedly")
            raise UnauthorizedError("Unauthorized") from None

        if not verdict.ok:
            logger.warning(f"Access denied: {verdict.failure.value} (token {token[:12]}...)")
            raise UnauthorizedError("Unauthorized")

        return verdict.payload
