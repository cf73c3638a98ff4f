# app/router/procurement/merchants_router.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_grocery_db as get_db
from shared.core.schemas import Lookup
from ...core.auth import get_current_membership
from ...crud.procurement import merchants_crud as crud
from ...models.family.family_members import FamilyMember
from ...schemas.procurement.merchants_schemas import (
    MerchantCreate, MerchantListResponse, MerchantOut, MerchantRequest, MerchantUpdate, MerchantUpdateResult
)

router = APIRouter(prefix="/api/merchants",
                   tags=["merchants"], dependencies=[Depends(validate_current_token)])


# ---------------- List all merchants ----------------

@router.get("", response_model=MerchantListResponse)
def get_merchants(
    params: MerchantRequest = Depends(),
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.get_merchants(db, membership.family_id, params)


@router.get("/merchant-type-lookup", response_model=List[Lookup])
def merchant_type_lookup(membership: FamilyMember = Depends(get_current_membership)):
    return crud.merchant_type_lookup()


@router.get("/{merchant_id}", response_model=MerchantOut)
def get_merchant(
    merchant_id: UUID,
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.get_merchant(db, membership.family_id, merchant_id)


# -------create-------------------------------

@router.post("", response_model=MerchantOut, status_code=status.HTTP_201_CREATED)
def create_merchant(
    merchant: MerchantCreate,
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.create_merchant(db, membership.family_id, merchant)


# ---------------- Update Merchants ----------------

@router.patch("/{merchant_id}", response_model=MerchantUpdateResult)
def update_merchant(
    merchant_id: UUID,
    merchant: MerchantUpdate,
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.update_merchant(db, membership.family_id, merchant_id, merchant)


# ---------------- Delete (Soft Delete) ----------------

@router.delete("/{merchant_id}", response_model=MerchantOut)
def delete_merchant(
    merchant_id: UUID,
    db: Session = Depends(get_db),
    membership: FamilyMember = Depends(get_current_membership)
):
    return crud.delete_merchant(db, membership.family_id, merchant_id)
