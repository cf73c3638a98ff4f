from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_grocery_db as get_db
from shared.core.schemas import UserToken
from ..crud.family.family_crud import resolve_membership
from ..models.family.family_members import FamilyMember


def current_user_id(current_user: UserToken = Depends(validate_current_token)) -> UUID:
    return UUID(current_user.user_id)


def get_current_membership(
    user_id: UUID = Depends(current_user_id),
    db: Session = Depends(get_db)
) -> FamilyMember:
    """Active membership of the caller; the family id of every scoped call comes from here."""
    return resolve_membership(db, user_id)
