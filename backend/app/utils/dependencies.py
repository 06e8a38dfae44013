import logging

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.user import User
from .error_handlers import get_error_message, raise_for_error
from .jwt import TokenService, get_token_service
from .result import UNAUTHENTICATED, Err, Ok, Result

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def parse_bearer(authorization: str | None) -> Result[str]:
    """Extract the token from an `Authorization: Bearer <token>` header value."""
    if not authorization:
        return Err(UNAUTHENTICATED, get_error_message("unauthorized"))

    if not authorization.startswith(BEARER_PREFIX):
        return Err(UNAUTHENTICATED, get_error_message("unauthorized"))

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        return Err(UNAUTHENTICATED, get_error_message("unauthorized"))

    return Ok(token)


def resolve_current_user(
    db: Session,
    authorization: str | None,
    token_service: TokenService,
) -> Result[User]:
    """
    Resolve the caller behind an Authorization header.

    Every failure collapses to the same unauthenticated error: a missing or
    malformed header, a token that fails verification, and a token whose
    subject no longer exists in the users table.
    """
    parsed = parse_bearer(authorization)
    if not parsed.ok:
        return parsed

    verified = token_service.verify(parsed.value)
    if not verified.ok:
        return verified

    user = db.query(User).filter(User.id == verified.value).first()
    if not user:
        logger.warning("Token subject %s does not match any user", verified.value)
        return Err(UNAUTHENTICATED, get_error_message("unauthorized"))

    return Ok(user)


def get_current_user(
    request: Request,
    authorization: str | None = Header(default=None),
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> User:
    """
    FastAPI dependency guarding protected routes.

    Raises UnauthenticatedError (401) before the route body runs; on success the
    user is also available to downstream code as `request.state.user`.
    """
    result = resolve_current_user(db, authorization, token_service)
    if not result.ok:
        raise_for_error(result)

    request.state.user = result.value
    return result.value
