# app/crud/system/notifications_crud.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import and_, exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.helpers.json_response_helper import not_found
from ...enum.family_enum import MemberStatus
from ...enum.notification_enum import NotificationType
from ...models.family.family_members import FamilyMember
from ...models.system.notification_reads import NotificationRead
from ...models.system.notifications import Notification
from ...schemas.system.notifications_schemas import (
    MarkAllReadResponse, NotificationCreate, NotificationListResponse, NotificationOut, NotificationReadOut,
    NotificationRequest
)

logger = logging.getLogger(__name__)


def _read_by(user_id: UUID):
    return exists().where(and_(
        NotificationRead.notification_id == Notification.id,
        NotificationRead.user_id == user_id,
    ))


def active_member_ids(db: Session, family_id: UUID) -> List[str]:
    rows = (
        db.query(FamilyMember.user_id)
        .filter(FamilyMember.family_id == family_id,
                FamilyMember.status == MemberStatus.active)
        .all()
    )
    return [str(row.user_id) for row in rows]


# ----------------- Fan-out -----------------

def notify(
    db: Session,
    family_id: UUID,
    type: NotificationType,
    title: str,
    message: str,
    recipients: Optional[List[UUID]] = None,
    data: Optional[Dict[str, Any]] = None,
) -> Notification:
    """Create one notification row addressed to every recipient.

    With no recipients the notification goes to all active members of the
    family. Read state is tracked per recipient in NotificationRead, so the
    row itself never changes after this call.
    """
    if recipients:
        recipient_ids = list(dict.fromkeys(str(r) for r in recipients))
    else:
        recipient_ids = active_member_ids(db, family_id)

    notification = Notification(
        family_id=family_id,
        type=type,
        title=title,
        message=message,
        data=data,
        recipients=recipient_ids,
    )
    db.add(notification)
    db.commit()
    db.refresh(notification)
    logger.info("Notification %s (%s) created for family %s",
                notification.id, type.value, family_id)
    return notification


def send_notification(db: Session, family_id: UUID, request: NotificationCreate) -> NotificationOut:
    notification = notify(
        db,
        family_id,
        request.type,
        request.title,
        request.message,
        recipients=request.recipients,
        data=request.data,
    )
    return NotificationOut.model_validate(notification)


# ----------------- Read tracking -----------------

def get_family_notification(db: Session, family_id: UUID, notification_id: UUID) -> Optional[Notification]:
    return db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.family_id == family_id
    ).first()


def _read_out(db: Session, family_id: UUID, receipt: NotificationRead) -> NotificationReadOut:
    return NotificationReadOut(
        notification_id=receipt.notification_id,
        user_id=receipt.user_id,
        read_at=receipt.read_at,
        unread_count=unread_count(db, family_id, receipt.user_id),
    )


def _find_receipt(db: Session, notification_id: UUID, user_id: UUID) -> Optional[NotificationRead]:
    return db.query(NotificationRead).filter(
        NotificationRead.notification_id == notification_id,
        NotificationRead.user_id == user_id
    ).first()


def mark_read(db: Session, family_id: UUID, notification_id: UUID, user_id: UUID) -> NotificationReadOut:
    notification = get_family_notification(db, family_id, notification_id)
    if not notification:
        return not_found("Notification")

    now = datetime.now(timezone.utc)
    receipt = _find_receipt(db, notification_id, user_id)
    if receipt:
        receipt.read_at = now
        db.commit()
        return _read_out(db, family_id, receipt)

    receipt = NotificationRead(notification_id=notification_id, user_id=user_id, read_at=now)
    db.add(receipt)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent request inserted the same pair; update that row instead
        db.rollback()
        receipt = _find_receipt(db, notification_id, user_id)
        if not receipt:
            raise
        receipt.read_at = now
        db.commit()
    return _read_out(db, family_id, receipt)


def mark_all_read(db: Session, family_id: UUID, user_id: UUID) -> MarkAllReadResponse:
    unread_ids = [
        row.id for row in
        db.query(Notification.id)
        .filter(Notification.family_id == family_id, ~_read_by(user_id))
        .all()
    ]

    now = datetime.now(timezone.utc)
    marked = 0
    for notification_id in unread_ids:
        db.add(NotificationRead(notification_id=notification_id, user_id=user_id, read_at=now))
        try:
            db.commit()
            marked += 1
        except IntegrityError:
            # already marked by a concurrent request
            db.rollback()

    return MarkAllReadResponse(marked=marked, unread_count=unread_count(db, family_id, user_id))


def unread_count(db: Session, family_id: UUID, user_id: UUID) -> int:
    # always derived from the read rows, never stored
    return db.query(func.count(Notification.id)).filter(
        Notification.family_id == family_id,
        ~_read_by(user_id)
    ).scalar() or 0


# ----------------- Listing -----------------

def get_all_notifications(db: Session, family_id: UUID, user_id: UUID, params: NotificationRequest) -> NotificationListResponse:
    is_read = _read_by(user_id)
    notification_query = db.query(Notification, is_read.label("is_read")).filter(
        Notification.family_id == family_id
    )

    if params.type:
        notification_query = notification_query.filter(Notification.type == params.type)

    if params.read is not None:
        notification_query = notification_query.filter(is_read if params.read else ~is_read)

    if params.search:
        notification_query = notification_query.filter(
            Notification.title.icontains(params.search, autoescape=True))

    total = notification_query.with_entities(
        func.count(Notification.id.distinct())).scalar()
    rows = (
        notification_query
        .order_by(Notification.sent_at.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    result = []
    for notification, read in rows:
        out = NotificationOut.model_validate(notification)
        out.is_read = bool(read)
        result.append(out)

    return NotificationListResponse(
        notifications=result,
        unread_count=unread_count(db, family_id, user_id),
        total=total,
        page=params.page,
        has_more=params.page * params.limit < total,
    )


def sent_today(db: Session, family_id: UUID, type: NotificationType, today) -> bool:
    start = datetime(today.year, today.month, today.day, tzinfo=timezone.utc)
    return db.query(
        select(Notification.id)
        .where(Notification.family_id == family_id,
               Notification.type == type,
               Notification.sent_at >= start,
               Notification.sent_at < start + timedelta(days=1))
        .exists()
    ).scalar()
