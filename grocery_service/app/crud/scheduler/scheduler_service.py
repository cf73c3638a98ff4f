# app/crud/scheduler/scheduler_service.py
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ...enum.inventory_enum import RecordStatus
from ...enum.notification_enum import NotificationType
from ...models.family.families import Family
from ...models.inventory.inventory_items import InventoryItem
from ..system import notifications_crud

logger = logging.getLogger(__name__)

SUMMARY_PREVIEW_LIMIT = 5


def _summary(names: List[str]) -> str:
    preview = ", ".join(names[:SUMMARY_PREVIEW_LIMIT])
    extra = len(names) - SUMMARY_PREVIEW_LIMIT
    return f"{preview} and {extra} more" if extra > 0 else preview


def _expiring_items(db: Session, family: Family, today: date) -> List[InventoryItem]:
    warning_end = today + timedelta(days=family.expiry_warning_days)
    return (
        db.query(InventoryItem)
        .filter(InventoryItem.family_id == family.id,
                InventoryItem.status == RecordStatus.active,
                InventoryItem.expiry_date.isnot(None),
                InventoryItem.expiry_date >= today,
                InventoryItem.expiry_date <= warning_end)
        .order_by(InventoryItem.expiry_date.asc())
        .all()
    )


def _expired_items(db: Session, family: Family, today: date) -> List[InventoryItem]:
    return (
        db.query(InventoryItem)
        .filter(InventoryItem.family_id == family.id,
                InventoryItem.status == RecordStatus.active,
                InventoryItem.expiry_date.isnot(None),
                InventoryItem.expiry_date < today)
        .order_by(InventoryItem.expiry_date.asc())
        .all()
    )


def _send_summary(db: Session, family: Family, type: NotificationType, items: List[InventoryItem],
                  title: str, message: str, today: date) -> bool:
    if not items:
        return False
    if notifications_crud.sent_today(db, family.id, type, today):
        return False

    notifications_crud.notify(
        db,
        family.id,
        type,
        title=title,
        message=message,
        data={
            "item_ids": [str(item.id) for item in items],
            "date": today.isoformat(),
        },
    )
    return True


def process_inventory_alerts(db: Session, today: Optional[date] = None) -> Dict[str, int]:
    """Send the daily expiring-soon / expired summaries to every family.

    Each family gets at most one notification per type per day, and only for
    the types its settings have switched on. Returns how many of each were sent.
    """
    today = today or datetime.now(timezone.utc).date()
    sent = {NotificationType.expiring_soon.value: 0, NotificationType.expired.value: 0}

    for family in db.query(Family).order_by(Family.created_at.asc()).all():
        if family.notify_expiring_soon:
            expiring = _expiring_items(db, family, today)
            if _send_summary(
                db, family, NotificationType.expiring_soon, expiring,
                title="Items expiring soon",
                message=f"{len(expiring)} item(s) expiring soon: {_summary([i.name for i in expiring])}",
                today=today,
            ):
                sent[NotificationType.expiring_soon.value] += 1

        if family.notify_expired:
            expired = _expired_items(db, family, today)
            if _send_summary(
                db, family, NotificationType.expired, expired,
                title="Items expired",
                message=f"{len(expired)} item(s) have expired: {_summary([i.name for i in expired])}",
                today=today,
            ):
                sent[NotificationType.expired.value] += 1

    logger.info("Inventory alerts for %s: %s", today.isoformat(), sent)
    return sent
