# app/router/system/notifications_router.py
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_grocery_db as get_db
from ...core.auth import get_current_membership
from ...crud.system import notifications_crud as crud
from ...models.family.family_members import FamilyMember
from ...schemas.system.notifications_schemas import (
    MarkAllReadResponse, NotificationCreate, NotificationListResponse, NotificationOut, NotificationReadOut,
    NotificationRequest
)

router = APIRouter(prefix="/api/notifications",
                   tags=["notifications"], dependencies=[Depends(validate_current_token)])


@router.get("", response_model=NotificationListResponse)
def get_all_notifications(
    params: NotificationRequest = Depends(),
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.get_all_notifications(db, membership.family_id, membership.user_id, params)


@router.post("/send", response_model=NotificationOut, status_code=status.HTTP_201_CREATED)
def send_notification(
    request: NotificationCreate,
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.send_notification(db, membership.family_id, request)


@router.post("/read-all", response_model=MarkAllReadResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.mark_all_read(db, membership.family_id, membership.user_id)


@router.post("/{notification_id}/read", response_model=NotificationReadOut)
def mark_read(
    notification_id: UUID,
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.mark_read(db, membership.family_id, notification_id, membership.user_id)
