# app/crud/procurement/orders_crud.py
import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from shared.helpers.json_response_helper import error_response, not_found, validation_error
from shared.utils.app_status_code import AppStatusCode
from ...enum.inventory_enum import RecordStatus
from ...enum.notification_enum import NotificationType
from ...enum.procurement_enum import OrderStatus
from ...models.inventory.inventory_items import InventoryItem
from ...models.procurement.order_items import OrderItem
from ...models.procurement.orders import Order
from ...schemas.procurement.orders_schemas import (
    OrderCreate, OrderItemCreate, OrderListResponse, OrderOut, OrderRequest, OrderStatusUpdate, RestockOrderCreate
)
from ..inventory.inventory_items_crud import get_family, get_inventory_item_by_id
from ..system import notifications_crud
from .merchants_crud import get_merchant_by_id

logger = logging.getLogger(__name__)


def _order_query(db: Session, family_id: UUID):
    return (
        db.query(Order)
        .options(selectinload(Order.items), joinedload(Order.merchant))
        .filter(Order.family_id == family_id)
    )


def get_order_by_id(db: Session, family_id: UUID, order_id: UUID) -> Optional[Order]:
    return _order_query(db, family_id).filter(Order.id == order_id).first()


def get_order(db: Session, family_id: UUID, order_id: UUID) -> OrderOut:
    db_order = get_order_by_id(db, family_id, order_id)
    if not db_order:
        return not_found("Order")
    return OrderOut.model_validate(db_order)


# ----------------- Get All Orders -----------------

def list_orders(db: Session, family_id: UUID, params: OrderRequest) -> OrderListResponse:
    filters = [Order.family_id == family_id]

    if params.status:
        filters.append(Order.status == params.status)

    if params.merchant_id:
        filters.append(Order.merchant_id == params.merchant_id)

    total = db.query(func.count(Order.id)).filter(*filters).scalar()

    orders = (
        _order_query(db, family_id)
        .filter(*filters)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return OrderListResponse.build(
        total=total,
        page=params.page,
        limit=params.limit,
        orders=[OrderOut.model_validate(o) for o in orders],
    )


# ----------------- Create -----------------

def _create_order(
    db: Session,
    family_id: UUID,
    user_id: UUID,
    merchant_id: Optional[UUID],
    items: List[OrderItemCreate],
    notes: Optional[str],
) -> OrderOut:
    if not items:
        return validation_error("An order needs at least one item", field="items")

    merchant = None
    if merchant_id:
        merchant = get_merchant_by_id(db, family_id, merchant_id)
        if not merchant:
            return not_found("Merchant")

    # linked inventory rows must be live items of this family
    for item in items:
        if item.inventory_item_id and not get_inventory_item_by_id(db, family_id, item.inventory_item_id):
            return not_found("Item")

    db_order = Order(
        family_id=family_id,
        merchant_id=merchant_id,
        status=OrderStatus.pending,
        notes=notes,
        created_by=user_id,
    )
    # names are copied as given and never re-read from the inventory row
    for position, item in enumerate(items):
        db_order.items.append(OrderItem(
            inventory_item_id=item.inventory_item_id,
            name=item.name,
            quantity=item.quantity,
            unit=item.unit or "pieces",
            notes=item.notes,
            position=position,
        ))

    db.add(db_order)
    db.commit()
    db.refresh(db_order)
    logger.info("Order %s created in family %s with %d items",
                db_order.id, family_id, len(items))

    notifications_crud.notify(
        db,
        family_id,
        NotificationType.order_created,
        title="New order",
        message=(f"Order with {len(items)} item(s) created"
                 + (f" for {merchant.name}" if merchant else "")),
        data={"order_id": str(db_order.id),
              "merchant_id": str(merchant_id) if merchant_id else None},
    )

    return get_order(db, family_id, db_order.id)


def create_order(db: Session, family_id: UUID, user_id: UUID, order: OrderCreate) -> OrderOut:
    return _create_order(db, family_id, user_id, order.merchant_id, order.items, order.notes)


def create_restock_order(db: Session, family_id: UUID, user_id: UUID, request: RestockOrderCreate) -> OrderOut:
    """Order every low-stock item of the family in one go."""
    family = get_family(db, family_id)
    low_stock = (
        db.query(InventoryItem)
        .filter(InventoryItem.family_id == family_id,
                InventoryItem.status == RecordStatus.active,
                InventoryItem.quantity <= family.low_stock_threshold)
        .order_by(func.lower(InventoryItem.name).asc())
        .all()
    )
    if not low_stock:
        return validation_error("No low-stock items to restock")

    items = [
        OrderItemCreate(
            inventory_item_id=item.id,
            name=item.name,
            quantity=request.quantity,
            unit=item.unit,
        )
        for item in low_stock
    ]
    return _create_order(db, family_id, user_id, request.merchant_id, items, request.notes)


# ----------------- Status -----------------

def update_order_status(db: Session, family_id: UUID, order_id: UUID, update: OrderStatusUpdate) -> OrderOut:
    try:
        new_status = OrderStatus(update.status.strip().lower())
    except ValueError:
        return error_response(
            message=f"Invalid status '{update.status}'",
            status_code=AppStatusCode.INVALID_STATUS,
            http_status=400
        )

    db_order = get_order_by_id(db, family_id, order_id)
    if not db_order:
        return not_found("Order")

    previous_status = db_order.status
    now = datetime.now(timezone.utc)
    db_order.status = new_status
    db_order.updated_at = now
    if new_status == OrderStatus.completed:
        db_order.completed_at = now

    db.commit()
    logger.info("Order %s moved %s -> %s", order_id, previous_status.value, new_status.value)

    if new_status == OrderStatus.completed and previous_status != OrderStatus.completed:
        notifications_crud.notify(
            db,
            family_id,
            NotificationType.order_completed,
            title="Order completed",
            message=f"Order with {len(db_order.items)} item(s) has been completed",
            data={"order_id": str(order_id)},
        )

    return get_order(db, family_id, order_id)
