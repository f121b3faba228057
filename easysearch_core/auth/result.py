"""Internal outcome of token and session checks.

Refresh rotation and the access guard evaluate a chain of checks. Each
check yields a Verdict: either accepted with the verified payload, or
rejected with a precise AuthFailure. The precise reason is logged for
operators; clients only ever see one generic UnauthorizedError.
"""

from dataclasses import dataclass
from enum import Enum

from .schemas import TokenPayload


class AuthFailure(str, Enum):
    """Why a token or session was rejected."""

    NO_TOKEN = "no_token"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_TAMPERED = "token_tampered"
    SESSION_NOT_FOUND = "session_not_found"
    SESSION_EXPIRED = "session_expired"
    SESSION_SUPERSEDED = "session_superseded"
    USER_NOT_FOUND = "user_not_found"
    USER_INACTIVE = "user_inactive"


@dataclass(frozen=True)
class Verdict:
    """Accepted payload or rejection reason; exactly one is set."""

    payload: TokenPayload | None = None
    failure: AuthFailure | None = None

    @classmethod
    def accept(cls, payload: TokenPayload) -> "Verdict":
        return cls(payload=payload)

    @classmethod
    def reject(cls, failure: AuthFailure) -> "Verdict":
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None
