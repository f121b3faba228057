"""JWT token signing and verification.

Two TokenSigner instances are wired at startup: one for short-lived access
tokens and one for long-lived refresh tokens, each with its own secret and
lifetime. Tokens carry:

- sub: user ID
- role: UserRole value
- typ: "access" or "refresh" (a signer only accepts its own type)
- iat / exp: Unix timestamps
- jti: random token ID, so two tokens issued in the same second differ
"""

import logging
import math
from datetime import timedelta
from typing import Literal

import jwt
from pydantic import ValidationError as PydanticValidationError

from ..schema.types import UserRole
from ..utils import isodatetime, uid
from .result import AuthFailure
from .schemas import TokenPayload

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "role", "typ", "iat", "exp"]


class TokenInvalid(Exception):
    """Token failed verification; reason says why."""

    def __init__(self, reason: AuthFailure, detail: str = ""):
        super().__init__(detail or reason.value)
        self.reason = reason


class TokenSigner:
    """Signs and verifies one kind of token with one secret and lifetime."""

    def __init__(
        self,
        secret: str,
        ttl: timedelta,
        token_type: Literal["access", "refresh"],
        algorithm: str = "HS256",
    ):
        if not secret:
            raise ValueError(f"{token_type} token secret must not be empty")
        self._secret = secret
        self.ttl = ttl
        self.token_type = token_type
        self.algorithm = algorithm

    def sign(self, subject_id: str, role: UserRole | str) -> str:
        """Create a signed token for a user.

        Args:
            subject_id: User ID, stored in the sub claim
            role: User role, stored in the role claim

        Returns:
            Encoded JWT string
        """
        now_ts = isodatetime.now_unix()
        payload = {
            "sub": subject_id,
            "role": UserRole(role).value,
            "typ": self.token_type,
            "iat": now_ts,
            "exp": now_ts + math.ceil(self.ttl.total_seconds()),
            "jti": uid.generate_token_id(),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenPayload:
        """Validate signature, expiry and claims.

        Raises:
            TokenInvalid: reason TOKEN_EXPIRED when exp has passed,
                TOKEN_TAMPERED for bad signatures, malformed tokens,
                missing claims or a token of the other type
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenInvalid(AuthFailure.TOKEN_EXPIRED, str(e)) from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalid(AuthFailure.TOKEN_TAMPERED, str(e)) from e

        try:
            payload = TokenPayload(**claims)
        except PydanticValidationError as e:
            raise TokenInvalid(AuthFailure.TOKEN_TAMPERED, "Invalid claims") from e

        if payload.typ != self.token_type:
            raise TokenInvalid(
                AuthFailure.TOKEN_TAMPERED,
                f"Expected {self.token_type} token, got {payload.typ}"
            )
        return payload
