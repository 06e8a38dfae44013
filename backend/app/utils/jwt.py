from datetime import datetime, timedelta, timezone
import logging
from typing import Callable

from jose import JWTError, jwt

from ..config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, SECRET_KEY
from .result import UNAUTHENTICATED, Err, Ok, Result

logger = logging.getLogger(__name__)

_DECODE_OPTIONS = {"require_exp": True, "require_iat": True, "require_sub": True}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Issues and verifies signed, time-limited bearer tokens.

    Tokens are stateless HS256 JWTs carrying {sub, iat, exp}; there is no
    revocation list, so the expiry is the only bound on a leaked token.
    The same secret must be used for issuing and verifying within a deployment.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = JWT_ALGORITHM,
        expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret_key:
            raise ValueError("A signing secret is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expires_minutes)
        self._clock = clock

    def issue(self, subject_id: int) -> str:
        issued_at = self._clock()
        claims = {
            "sub": str(subject_id),
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Result[int]:
        """Return Ok(user id) for a valid token, Err otherwise. Never raises."""
        if not token or not isinstance(token, str):
            return Err(UNAUTHENTICATED, "Token is missing")

        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options=_DECODE_OPTIONS,
            )
        except JWTError as e:
            logger.info("Rejected token: %s", e)
            return Err(UNAUTHENTICATED, "Invalid or expired token")

        try:
            subject_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError):
            return Err(UNAUTHENTICATED, "Token subject is invalid")

        return Ok(subject_id)


_token_service = TokenService(SECRET_KEY)


def get_token_service() -> TokenService:
    """FastAPI dependency for the process-wide token service (override in tests)."""
    return _token_service


def create_access_token(subject_id: int) -> str:
    return _token_service.issue(subject_id)
