from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.user import User
from ..utils.dependencies import get_current_user
from .auth import user_to_public

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("")
def list_users(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    users = db.query(User).order_by(User.id.asc()).all()
    return {"success": True, "users": [user_to_public(u) for u in users]}
