from functools import lru_cache
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.user import User
from ..utils.error_handlers import get_error_message
from ..utils.result import CONFLICT, UNAUTHENTICATED, Err, Ok, Result
from ..utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_password_hash() -> str:
    # Compared against when the email is unknown, so both login failures cost one bcrypt check.
    return hash_password("not-a-real-password")


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def register_user(
    db: Session,
    *,
    name: str,
    email: str,
    password: str,
    phone: str | None = None,
    user_type: int,
) -> Result[User]:
    """Create a user with a hashed password. Expects already validated input."""
    if find_user_by_email(db, email):
        return Err(CONFLICT, get_error_message("email_exists"))

    user = User(
        name=name,
        email=email,
        password=hash_password(password),
        phone=phone,
        user_type=user_type,
    )
    try:
        db.add(user)
        db.commit()
    except IntegrityError:
        # Another request registered the same email between the check and the insert.
        db.rollback()
        logger.info("Duplicate registration rejected by unique index for %s", email)
        return Err(CONFLICT, get_error_message("email_exists"))

    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return Ok(user)


def authenticate(db: Session, *, email: str, password: str) -> Result[User]:
    user = find_user_by_email(db, email)
    if not user:
        verify_password(password, _dummy_password_hash())
        return Err(UNAUTHENTICATED, get_error_message("invalid_credentials"))

    if not verify_password(password, user.password):
        return Err(UNAUTHENTICATED, get_error_message("invalid_credentials"))

    return Ok(user)
