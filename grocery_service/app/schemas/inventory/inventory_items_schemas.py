from datetime import date, datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field, HttpUrl

from shared.core.schemas import CommonQueryParams, PagedResult
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.inventory_enum import (
    ExpiryStatus, InventorySortField, ProductCategory, RecordStatus, SortOrder
)


class InventoryItemBase(EmptyStringModel):
    name: str = Field(min_length=1, max_length=200)
    quantity: float = Field(ge=0)
    unit: str = "pieces"
    category: ProductCategory
    barcode: Optional[str] = None
    expiry_date: Optional[date] = None
    image_url: Optional[HttpUrl] = None
    notes: Optional[str] = None


class InventoryItemCreate(InventoryItemBase):
    pass


class InventoryItemUpdate(EmptyStringModel):
    quantity: Optional[float] = Field(default=None, ge=0)
    expiry_date: Optional[date] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    category: Optional[ProductCategory] = None
    notes: Optional[str] = None


class InventoryRequest(CommonQueryParams):
    category: Optional[ProductCategory] = None
    sort_by: InventorySortField = InventorySortField.name
    sort_order: SortOrder = SortOrder.asc


class AddedByOut(BaseModel):
    id: UUID
    name: str

    model_config = {"from_attributes": True}


class InventoryItemOut(BaseModel):
    id: UUID
    family_id: UUID
    name: str
    barcode: Optional[str] = None
    quantity: float
    unit: str
    category: ProductCategory
    expiry_date: Optional[date] = None
    image_url: Optional[str] = None
    notes: Optional[str] = None
    added_by: UUID
    added_by_user: Optional[AddedByOut] = None
    status: RecordStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class InventoryItemStatusOut(InventoryItemOut):
    expiry_status: ExpiryStatus
    is_low_stock: bool


class InventoryListResponse(PagedResult):
    items: List[InventoryItemOut]


class InventoryAddResult(BaseModel):
    item: InventoryItemOut
    is_duplicate: bool
    previous_quantity: float


class InventoryUpdateResult(BaseModel):
    item: InventoryItemOut
    updated: List[str]


class InventoryOverviewResponse(BaseModel):
    total_items: int
    low_stock: int
    expiring: int
    expired: int


class LowStockResponse(BaseModel):
    items: List[InventoryItemStatusOut]
    threshold: int
