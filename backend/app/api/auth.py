from datetime import datetime
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.user import User
from ..services.auth import authenticate, register_user
from ..utils.error_handlers import ValidationError, get_error_message, raise_for_error
from ..utils.jwt import TokenService, get_token_service
from ..utils.result import UNAUTHENTICATED
from ..utils.validation import (
    validate_email,
    validate_password,
    validate_phone,
    validate_string_field,
    validate_user_type,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    phone: str | None = None
    userType: int | str | None = None  # 1 = job seeker (default), 2 = employer


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


def user_to_public(user: User) -> dict:
    # Never expose the password digest.
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "userType": user.user_type,
        "createdOn": user.created_on.isoformat() if isinstance(user.created_on, datetime) else user.created_on,
    }


def _auth_payload(user: User, token: str, message: str) -> dict:
    return {
        "message": message,
        "user": user_to_public(user),
        "token": token,
        "token_type": "bearer",
    }


@router.post("/register", status_code=201)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    name = validate_string_field(payload.name, "Name", max_length=255)
    email = validate_email(payload.email)
    validate_password(payload.password)
    phone = validate_phone(payload.phone)
    user_type = validate_user_type(payload.userType)

    result = register_user(
        db,
        name=name,
        email=email,
        password=payload.password,
        phone=phone,
        user_type=user_type,
    )
    if not result.ok:
        raise_for_error(result)

    user = result.value
    return _auth_payload(user, token_service.issue(user.id), "User registered successfully")


@router.post("/login")
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    email = validate_email(payload.email)
    if not payload.password:
        raise ValidationError("Password is required")

    result = authenticate(db, email=email, password=payload.password)
    if not result.ok:
        # Bad credentials are a 400 on this endpoint, unlike a bad token elsewhere.
        if result.code == UNAUTHENTICATED:
            logger.info("Failed login attempt for %s", email)
            raise ValidationError(get_error_message("invalid_credentials"))
        raise_for_error(result)

    user = result.value
    return _auth_payload(user, token_service.issue(user.id), "Login successful")
