# app/router/family/family_router.py
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_grocery_db as get_db
from ...core.auth import current_user_id, get_current_membership
from ...crud.family import family_crud as crud
from ...models.family.family_members import FamilyMember
from ...schemas.family.family_schemas import (
    FamilyCreate, FamilyJoinRequest, FamilyMemberOut, FamilyOut, FamilySettingsOut,
    FamilySettingsUpdate, MemberCreate, MemberListResponse, MembershipOut
)

router = APIRouter(prefix="/api/families",
                   tags=["families"], dependencies=[Depends(validate_current_token)])


# ---------------- Create / Join ----------------

@router.post("", response_model=FamilyOut, status_code=status.HTTP_201_CREATED)
def create_family(
    request: FamilyCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(current_user_id)
):
    return crud.create_family(db, user_id, request)


@router.post("/join", response_model=FamilyOut)
def join_family(
    request: FamilyJoinRequest,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(current_user_id)
):
    return crud.join_family(db, user_id, request)


@router.post("/leave", response_model=FamilyMemberOut)
def leave_family(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(current_user_id)
):
    return crud.leave_family(db, user_id)


# ---------------- Caller's family ----------------

@router.get("/my-family", response_model=FamilyOut)
def get_my_family(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(current_user_id)
):
    return crud.get_my_family(db, user_id)


@router.get("/membership", response_model=MembershipOut)
def get_membership(membership: FamilyMember = Depends(get_current_membership)):
    return MembershipOut(family_id=membership.family_id, role=membership.role)


# ---------------- Members ----------------

@router.get("/{family_id}/members", response_model=MemberListResponse)
def list_members(
    family_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(current_user_id)
):
    return crud.list_members(db, user_id, family_id)


@router.post("/{family_id}/members", response_model=FamilyMemberOut, status_code=status.HTTP_201_CREATED)
def add_member(
    family_id: UUID,
    request: MemberCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(current_user_id)
):
    return crud.add_member(db, user_id, family_id, request)


@router.delete("/{family_id}/members/{member_user_id}", response_model=FamilyMemberOut)
def remove_member(
    family_id: UUID,
    member_user_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(current_user_id)
):
    return crud.remove_member(db, user_id, family_id, member_user_id)


# ---------------- Settings ----------------

@router.patch("/{family_id}/settings", response_model=FamilySettingsOut)
def update_settings(
    family_id: UUID,
    request: FamilySettingsUpdate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(current_user_id)
):
    return crud.update_settings(db, user_id, family_id, request)
