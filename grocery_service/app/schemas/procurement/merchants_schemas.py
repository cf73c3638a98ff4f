from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from shared.core.schemas import CommonQueryParams, PagedResult
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.inventory_enum import ProductCategory, RecordStatus
from ...enum.procurement_enum import MerchantType

PHONE_PATTERN = r"^\+?[0-9][0-9 \-]{5,18}$"


class Address(EmptyStringModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


# ---------------- Base Merchant ----------------
class MerchantBase(EmptyStringModel):
    name: str = Field(min_length=1, max_length=200)
    type: MerchantType
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    email: Optional[EmailStr] = None
    address: Optional[Address] = None
    categories: List[ProductCategory] = []
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    notes: Optional[str] = None


class MerchantCreate(MerchantBase):
    pass


class MerchantUpdate(EmptyStringModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    type: Optional[MerchantType] = None
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    email: Optional[EmailStr] = None
    address: Optional[Address] = None
    categories: Optional[List[ProductCategory]] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    notes: Optional[str] = None


# ---------------- Merchant Request ----------------
class MerchantRequest(CommonQueryParams):
    type: Optional[MerchantType] = None


# ---------------- Merchant Output ----------------
class MerchantOut(BaseModel):
    id: UUID
    family_id: UUID
    name: str
    type: MerchantType
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[Address] = None
    categories: List[ProductCategory] = []
    rating: Optional[float] = None
    notes: Optional[str] = None
    status: RecordStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MerchantListResponse(PagedResult):
    merchants: List[MerchantOut]


class MerchantUpdateResult(BaseModel):
    merchant: MerchantOut
    updated: List[str]
