# app/crud/inventory/inventory_items_crud.py
import logging
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from shared.core.schemas import Lookup
from shared.helpers.json_response_helper import conflict, not_found
from ...enum.inventory_enum import InventorySortField, ProductCategory, RecordStatus, SortOrder
from ...enum.notification_enum import NotificationType
from ...models.family.families import Family
from ...models.inventory.inventory_items import InventoryItem
from ...schemas.inventory.inventory_items_schemas import (
    InventoryAddResult, InventoryItemCreate, InventoryItemOut, InventoryItemStatusOut, InventoryItemUpdate,
    InventoryListResponse, InventoryOverviewResponse, InventoryRequest, InventoryUpdateResult, LowStockResponse
)
from ..system import notifications_crud
from grocery_service.util.stock_status import classify_expiry, is_low_stock

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("quantity", "expiry_date", "name", "category", "notes")


def _now():
    return datetime.now(timezone.utc)


def get_family(db: Session, family_id: UUID) -> Family:
    return db.query(Family).filter(Family.id == family_id).one()


def _active_items(db: Session, family_id: UUID):
    return db.query(InventoryItem).filter(
        InventoryItem.family_id == family_id,
        InventoryItem.status == RecordStatus.active
    )


def find_active_by_name(db: Session, family_id: UUID, name: str, lock: bool = False) -> Optional[InventoryItem]:
    query = _active_items(db, family_id).filter(
        func.lower(InventoryItem.name) == name.strip().lower())
    if lock:
        query = query.with_for_update()
    return query.first()


def get_inventory_item_by_id(db: Session, family_id: UUID, item_id: UUID) -> Optional[InventoryItem]:
    # missing, deleted and other-family items all look the same to the caller
    return (
        _active_items(db, family_id)
        .options(joinedload(InventoryItem.added_by_user))
        .filter(InventoryItem.id == item_id)
        .first()
    )


def get_inventory_item(db: Session, family_id: UUID, item_id: UUID) -> InventoryItemOut:
    db_item = get_inventory_item_by_id(db, family_id, item_id)
    if not db_item:
        return not_found("Item")
    return InventoryItemOut.model_validate(db_item)


# ----------------- Add / Merge -----------------

def _merge_quantity(db: Session, existing: InventoryItem, quantity: float) -> InventoryAddResult:
    previous_quantity = existing.quantity
    existing.quantity = previous_quantity + quantity
    existing.updated_at = _now()
    db.commit()
    db.refresh(existing)
    logger.info("Merged %s into item %s (%s -> %s)",
                quantity, existing.id, previous_quantity, existing.quantity)
    return InventoryAddResult(
        item=InventoryItemOut.model_validate(existing),
        is_duplicate=True,
        previous_quantity=previous_quantity,
    )


def add_inventory_item(db: Session, family_id: UUID, user_id: UUID, item: InventoryItemCreate) -> InventoryAddResult:
    """Add an item, or merge its quantity into the active item with the same name.

    Names match case-insensitively within the family. The partial unique index
    on (family_id, lower(name)) for active rows catches the case where two
    requests both miss the lookup; the loser retries as a merge.
    """
    existing = find_active_by_name(db, family_id, item.name, lock=True)
    if existing:
        return _merge_quantity(db, existing, item.quantity)

    item_data = item.model_dump()
    item_data["image_url"] = str(item.image_url) if item.image_url else None
    db_item = InventoryItem(family_id=family_id, added_by=user_id, **item_data)
    db.add(db_item)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = find_active_by_name(db, family_id, item.name, lock=True)
        if not existing:
            raise
        logger.info("Concurrent add of '%s' in family %s resolved as merge", item.name, family_id)
        return _merge_quantity(db, existing, item.quantity)

    db.refresh(db_item)

    family = get_family(db, family_id)
    if family.notify_new_items:
        notifications_crud.notify(
            db,
            family_id,
            NotificationType.new_item,
            title="New item added",
            message=f"{db_item.name} ({db_item.quantity:g} {db_item.unit}) was added to the inventory",
            data={"item_id": str(db_item.id), "added_by": str(user_id)},
        )

    return InventoryAddResult(
        item=InventoryItemOut.model_validate(db_item),
        is_duplicate=False,
        previous_quantity=0,
    )


# ----------------- Update -----------------

def update_inventory_item(db: Session, family_id: UUID, item_id: UUID, update: InventoryItemUpdate) -> InventoryUpdateResult:
    db_item = get_inventory_item_by_id(db, family_id, item_id)
    if not db_item:
        return not_found("Item")

    previous_quantity = db_item.quantity
    changed: List[str] = []

    # Update only the fields that are provided
    for field, value in update.model_dump(exclude_unset=True).items():
        if field not in UPDATABLE_FIELDS:
            continue
        if field in ("quantity", "name", "category") and value is None:
            continue
        if getattr(db_item, field) != value:
            setattr(db_item, field, value)
            changed.append(field)

    db_item.updated_at = _now()
    try:
        db.commit()
    except IntegrityError:
        # renamed onto another active item's name
        db.rollback()
        return conflict("An item with this name already exists")
    db.refresh(db_item)

    if "quantity" in changed:
        family = get_family(db, family_id)
        crossed = (not is_low_stock(previous_quantity, family.low_stock_threshold)
                   and is_low_stock(db_item.quantity, family.low_stock_threshold))
        if crossed and family.notify_low_stock:
            notifications_crud.notify(
                db,
                family_id,
                NotificationType.low_stock,
                title="Running low",
                message=f"{db_item.name} is running low ({db_item.quantity:g} {db_item.unit} left)",
                data={"item_id": str(db_item.id), "quantity": db_item.quantity},
            )

    return InventoryUpdateResult(item=InventoryItemOut.model_validate(db_item), updated=changed)


# ----------------- Soft Delete -----------------

def delete_inventory_item(db: Session, family_id: UUID, item_id: UUID) -> InventoryItemOut:
    db_item = get_inventory_item_by_id(db, family_id, item_id)
    if not db_item:
        return not_found("Item")

    db_item.status = RecordStatus.deleted
    db_item.deleted_at = _now()
    db_item.updated_at = _now()
    db.commit()
    db.refresh(db_item)
    return InventoryItemOut.model_validate(db_item)


# ----------------- Listing -----------------

def _order_by(sort_by: InventorySortField, sort_order: SortOrder):
    descending = sort_order == SortOrder.desc

    if sort_by == InventorySortField.expiry_date:
        column = InventoryItem.expiry_date
        # undated items always trail, whatever the direction
        return [InventoryItem.expiry_date.is_(None), column.desc() if descending else column.asc(),
                InventoryItem.created_at.asc(), InventoryItem.id.asc()]

    column = {
        InventorySortField.name: func.lower(InventoryItem.name),
        InventorySortField.quantity: InventoryItem.quantity,
        InventorySortField.date_added: InventoryItem.created_at,
    }[sort_by]
    return [column.desc() if descending else column.asc(),
            InventoryItem.created_at.asc(), InventoryItem.id.asc()]


def get_inventory_items(db: Session, family_id: UUID, params: InventoryRequest) -> InventoryListResponse:
    item_query = _active_items(db, family_id)

    if params.category:
        item_query = item_query.filter(InventoryItem.category == params.category)

    if params.search:
        # substring match; % and _ in the text are literal
        item_query = item_query.filter(InventoryItem.name.icontains(params.search, autoescape=True))

    total = item_query.with_entities(func.count(InventoryItem.id)).scalar()
    items = (
        item_query
        .options(joinedload(InventoryItem.added_by_user))
        .order_by(*_order_by(params.sort_by, params.sort_order))
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return InventoryListResponse.build(
        total=total,
        page=params.page,
        limit=params.limit,
        items=[InventoryItemOut.model_validate(i) for i in items],
    )


def _with_status(item: InventoryItem, family: Family, today: date) -> InventoryItemStatusOut:
    out = InventoryItemOut.model_validate(item).model_dump()
    return InventoryItemStatusOut(
        **out,
        expiry_status=classify_expiry(item.expiry_date, today, family.expiry_warning_days),
        is_low_stock=is_low_stock(item.quantity, family.low_stock_threshold),
    )


def get_low_stock_items(db: Session, family_id: UUID, today: Optional[date] = None) -> LowStockResponse:
    family = get_family(db, family_id)
    today = today or date.today()
    items = (
        _active_items(db, family_id)
        .filter(InventoryItem.quantity <= family.low_stock_threshold)
        .order_by(InventoryItem.quantity.asc(), func.lower(InventoryItem.name).asc())
        .all()
    )
    return LowStockResponse(
        items=[_with_status(i, family, today) for i in items],
        threshold=family.low_stock_threshold,
    )


def get_inventory_overview(db: Session, family_id: UUID, today: Optional[date] = None) -> InventoryOverviewResponse:
    family = get_family(db, family_id)
    today = today or date.today()
    warning_end = today + timedelta(days=family.expiry_warning_days)
    base_query = _active_items(db, family_id)

    total_items = base_query.with_entities(func.count(InventoryItem.id)).scalar()

    low_stock = base_query.with_entities(func.count(InventoryItem.id)).filter(
        InventoryItem.quantity <= family.low_stock_threshold
    ).scalar()

    expiring = base_query.with_entities(func.count(InventoryItem.id)).filter(
        InventoryItem.expiry_date.isnot(None),
        InventoryItem.expiry_date >= today,
        InventoryItem.expiry_date <= warning_end
    ).scalar()

    expired = base_query.with_entities(func.count(InventoryItem.id)).filter(
        InventoryItem.expiry_date.isnot(None),
        InventoryItem.expiry_date < today
    ).scalar()

    return InventoryOverviewResponse(
        total_items=total_items or 0,
        low_stock=low_stock or 0,
        expiring=expiring or 0,
        expired=expired or 0,
    )


def inventory_category_lookup() -> List[Lookup]:
    return [
        Lookup(id=category.value, name=category.name.replace("_", " ").capitalize())
        for category in ProductCategory
    ]
