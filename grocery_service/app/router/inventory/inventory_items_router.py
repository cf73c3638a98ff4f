# app/router/inventory/inventory_items_router.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_grocery_db as get_db
from shared.core.schemas import JsonOutResult, Lookup
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...core.auth import get_current_membership
from ...crud.inventory import inventory_items_crud as crud
from ...models.family.family_members import FamilyMember
from ...schemas.inventory.inventory_items_schemas import (
    InventoryAddResult, InventoryItemCreate, InventoryItemOut, InventoryItemUpdate, InventoryListResponse,
    InventoryOverviewResponse, InventoryRequest, InventoryUpdateResult, LowStockResponse
)

router = APIRouter(prefix="/api/inventory",
                   tags=["inventory"], dependencies=[Depends(validate_current_token)])


# ---------------- List ----------------

@router.get("", response_model=InventoryListResponse)
def get_inventory_items(
    params: InventoryRequest = Depends(),
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.get_inventory_items(db, membership.family_id, params)


@router.get("/low-stock", response_model=LowStockResponse)
def get_low_stock_items(
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.get_low_stock_items(db, membership.family_id)


@router.get("/overview", response_model=InventoryOverviewResponse)
def get_inventory_overview(
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.get_inventory_overview(db, membership.family_id)


@router.get("/categories", response_model=List[Lookup])
def inventory_category_lookup(membership: FamilyMember = Depends(get_current_membership)):
    return crud.inventory_category_lookup()


# ---------------- Add / Merge ----------------

@router.post("", response_model=JsonOutResult[InventoryAddResult], status_code=status.HTTP_201_CREATED)
def add_inventory_item(
    item: InventoryItemCreate,
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    result = crud.add_inventory_item(db, membership.family_id, membership.user_id, item)
    if result.is_duplicate:
        return success_response(result, "Item quantity updated", AppStatusCode.UPDATED_SUCCESSFULLY)
    return success_response(result, "Item added successfully", AppStatusCode.CREATED_SUCCESSFULLY)


# ---------------- Single item ----------------

@router.get("/{item_id}", response_model=InventoryItemOut)
def get_inventory_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.get_inventory_item(db, membership.family_id, item_id)


@router.patch("/{item_id}", response_model=InventoryUpdateResult)
def update_inventory_item(
    item_id: UUID,
    update: InventoryItemUpdate,
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.update_inventory_item(db, membership.family_id, item_id, update)


# ---------------- Delete (Soft Delete) ----------------

@router.delete("/{item_id}", response_model=InventoryItemOut)
def delete_inventory_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.delete_inventory_item(db, membership.family_id, item_id)
