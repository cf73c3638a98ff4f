from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.family_enum import FamilyRole, MemberStatus


# ---------------- Requests ----------------
class FamilyCreate(EmptyStringModel):
    name: str = Field(min_length=1, max_length=100)


class FamilyJoinRequest(EmptyStringModel):
    invite_code: str = Field(min_length=6, max_length=6)


class MemberCreate(EmptyStringModel):
    name: str = Field(min_length=1, max_length=100)
    phone: str = Field(min_length=7, max_length=20, pattern=r"^\+?[0-9][0-9 \-]{5,18}$")
    # owners are only ever created with the family itself
    role: FamilyRole = FamilyRole.member


class NotificationToggles(BaseModel):
    low_stock: Optional[bool] = None
    expiring_soon: Optional[bool] = None
    expired: Optional[bool] = None
    new_items: Optional[bool] = None


class FamilySettingsUpdate(EmptyStringModel):
    notifications: Optional[NotificationToggles] = None
    low_stock_threshold: Optional[int] = Field(default=None, ge=0)
    expiry_warning_days: Optional[int] = Field(default=None, ge=0)


# ---------------- Output ----------------
class MemberUserOut(BaseModel):
    id: UUID
    name: str
    phone: str

    model_config = {"from_attributes": True}


class FamilyMemberOut(BaseModel):
    id: UUID
    family_id: UUID
    user_id: UUID
    role: FamilyRole
    status: MemberStatus
    joined_at: Optional[datetime] = None
    user: Optional[MemberUserOut] = None

    model_config = {"from_attributes": True}


class FamilySettingsOut(BaseModel):
    notifications: NotificationToggles
    low_stock_threshold: int
    expiry_warning_days: int


class FamilyOut(BaseModel):
    id: UUID
    name: str
    invite_code: str
    owner_id: UUID
    settings: FamilySettingsOut
    members: List[FamilyMemberOut] = []
    role: Optional[FamilyRole] = None
    created_at: Optional[datetime] = None


class MemberListResponse(BaseModel):
    members: List[FamilyMemberOut]
    total: int


class MembershipOut(BaseModel):
    family_id: UUID
    role: FamilyRole
