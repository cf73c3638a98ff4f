from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID
from pydantic import BaseModel, Field

from shared.core.schemas import CommonQueryParams
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.notification_enum import NotificationType


class NotificationCreate(EmptyStringModel):
    type: NotificationType
    title: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1)
    recipients: Optional[List[UUID]] = None
    data: Optional[Dict[str, Any]] = None


class NotificationRequest(CommonQueryParams):
    type: Optional[NotificationType] = None
    read: Optional[bool] = None


class NotificationOut(BaseModel):
    id: UUID
    family_id: UUID
    type: NotificationType
    title: str
    message: str
    data: Optional[Dict[str, Any]] = None
    recipients: List[str]
    sent_at: datetime
    is_read: bool = False

    model_config = {"from_attributes": True}


class NotificationListResponse(BaseModel):
    notifications: List[NotificationOut]
    unread_count: int
    total: int
    page: int
    has_more: bool


class MarkAllReadResponse(BaseModel):
    marked: int
    unread_count: int


class NotificationReadOut(BaseModel):
    notification_id: UUID
    user_id: UUID
    read_at: datetime
    unread_count: int
