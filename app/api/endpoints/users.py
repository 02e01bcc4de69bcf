from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_correct_user_or_admin
from app.crud import user as user_crud
from app.schemas.user import UserEnvelope, UserResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/{username}", response_model=UserEnvelope)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    claims: dict = Depends(ensure_correct_user_or_admin),
):
    """Retrieve a user's profile; only that user or an admin may."""
    user = user_crud.get(db, username)
    return UserEnvelope(user=UserResponse.model_validate(user))
