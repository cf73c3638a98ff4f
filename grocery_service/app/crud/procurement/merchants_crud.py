# app/crud/procurement/merchants_crud.py
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from shared.core.schemas import Lookup
from shared.helpers.json_response_helper import not_found
from ...enum.inventory_enum import RecordStatus
from ...enum.procurement_enum import MerchantType
from ...models.procurement.merchants import Merchant
from ...schemas.procurement.merchants_schemas import (
    MerchantCreate, MerchantListResponse, MerchantOut, MerchantRequest, MerchantUpdate, MerchantUpdateResult
)

# ----------------- Build Filters for Merchants -----------------


def build_merchant_filters(family_id: UUID, params: MerchantRequest):
    # Always filter out deleted merchants
    filters = [Merchant.family_id == family_id,
               Merchant.status == RecordStatus.active]

    if params.type:
        filters.append(Merchant.type == params.type)

    if params.search:
        filters.append(
            or_(
                Merchant.name.icontains(params.search, autoescape=True),
                Merchant.phone.icontains(params.search, autoescape=True),
                Merchant.email.icontains(params.search, autoescape=True)
            )
        )

    return filters


# ----------------- Get All Merchants -----------------

def get_merchants(db: Session, family_id: UUID, params: MerchantRequest) -> MerchantListResponse:
    base_query = db.query(Merchant).filter(*build_merchant_filters(family_id, params))

    # Total count for pagination
    total = base_query.with_entities(func.count(Merchant.id)).scalar()

    merchants = (
        base_query
        .order_by(Merchant.name.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return MerchantListResponse.build(
        total=total,
        page=params.page,
        limit=params.limit,
        merchants=[MerchantOut.model_validate(m) for m in merchants],
    )


def get_merchant_by_id(db: Session, family_id: UUID, merchant_id: UUID) -> Optional[Merchant]:
    return db.query(Merchant).filter(
        Merchant.id == merchant_id,
        Merchant.family_id == family_id,
        Merchant.status == RecordStatus.active
    ).first()


def get_merchant(db: Session, family_id: UUID, merchant_id: UUID) -> MerchantOut:
    db_merchant = get_merchant_by_id(db, family_id, merchant_id)
    if not db_merchant:
        return not_found("Merchant")
    return MerchantOut.model_validate(db_merchant)


def create_merchant(db: Session, family_id: UUID, merchant: MerchantCreate) -> MerchantOut:
    db_merchant = Merchant(family_id=family_id, **merchant.model_dump(mode="json"))
    db.add(db_merchant)
    db.commit()
    db.refresh(db_merchant)
    return MerchantOut.model_validate(db_merchant)


def update_merchant(db: Session, family_id: UUID, merchant_id: UUID, merchant: MerchantUpdate) -> MerchantUpdateResult:
    db_merchant = get_merchant_by_id(db, family_id, merchant_id)
    if not db_merchant:
        return not_found("Merchant")

    update_data = merchant.model_dump(mode="json", exclude_unset=True)
    for key, value in update_data.items():
        setattr(db_merchant, key, value)
    db_merchant.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(db_merchant)
    return MerchantUpdateResult(
        merchant=MerchantOut.model_validate(db_merchant),
        updated=list(update_data.keys()),
    )


# ----------------- Delete (Soft Delete) -----------------

def delete_merchant(db: Session, family_id: UUID, merchant_id: UUID) -> MerchantOut:
    db_merchant = get_merchant_by_id(db, family_id, merchant_id)
    if not db_merchant:
        return not_found("Merchant")

    db_merchant.status = RecordStatus.deleted
    db_merchant.deleted_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(db_merchant)
    return MerchantOut.model_validate(db_merchant)


def merchant_type_lookup() -> List[Lookup]:
    return [
        Lookup(id=merchant_type.value, name=merchant_type.name.capitalize())
        for merchant_type in MerchantType
    ]
