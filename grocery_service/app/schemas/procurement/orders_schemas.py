from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field

from shared.core.schemas import CommonQueryParams, PagedResult
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.procurement_enum import OrderStatus


class OrderItemCreate(EmptyStringModel):
    inventory_item_id: Optional[UUID] = None
    name: str = Field(min_length=1, max_length=200)
    quantity: float = Field(gt=0)
    unit: str = "pieces"
    notes: Optional[str] = None


class OrderCreate(EmptyStringModel):
    merchant_id: Optional[UUID] = None
    items: List[OrderItemCreate] = Field(min_length=1)
    notes: Optional[str] = None


class RestockOrderCreate(EmptyStringModel):
    merchant_id: Optional[UUID] = None
    quantity: float = Field(default=1, gt=0)
    notes: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    status: str


class OrderRequest(CommonQueryParams):
    status: Optional[OrderStatus] = None
    merchant_id: Optional[UUID] = None


class OrderItemOut(BaseModel):
    id: UUID
    inventory_item_id: Optional[UUID] = None
    name: str
    quantity: float
    unit: str
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class OrderMerchantOut(BaseModel):
    id: UUID
    name: str

    model_config = {"from_attributes": True}


class OrderOut(BaseModel):
    id: UUID
    family_id: UUID
    merchant_id: Optional[UUID] = None
    merchant: Optional[OrderMerchantOut] = None
    status: OrderStatus
    notes: Optional[str] = None
    created_by: UUID
    items: List[OrderItemOut]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class OrderListResponse(PagedResult):
    orders: List[OrderOut]
