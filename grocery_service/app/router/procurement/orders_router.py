# app/router/procurement/orders_router.py
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_grocery_db as get_db
from ...core.auth import get_current_membership
from ...crud.procurement import orders_crud as crud
from ...models.family.family_members import FamilyMember
from ...schemas.procurement.orders_schemas import (
    OrderCreate, OrderListResponse, OrderOut, OrderRequest, OrderStatusUpdate, RestockOrderCreate
)

router = APIRouter(prefix="/api/orders",
                   tags=["orders"], dependencies=[Depends(validate_current_token)])


@router.get("", response_model=OrderListResponse)
def list_orders(
    params: OrderRequest = Depends(),
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.list_orders(db, membership.family_id, params)


@router.post("", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def create_order(
    order: OrderCreate,
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.create_order(db, membership.family_id, membership.user_id, order)


@router.post("/restock", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def create_restock_order(
    request: RestockOrderCreate,
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.create_restock_order(db, membership.family_id, membership.user_id, request)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: UUID,
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.get_order(db, membership.family_id, order_id)


@router.patch("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: UUID,
    update: OrderStatusUpdate,
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.update_order_status(db, membership.family_id, order_id, update)
