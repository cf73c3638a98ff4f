# app/crud/family/family_crud.py
import logging
import secrets
import string
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from shared.core.config import settings
from shared.helpers.json_response_helper import conflict, error_response, forbidden, not_found, not_part_of_family
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from ...enum.family_enum import Capability, FamilyRole, MemberStatus, has_capability
from ...enum.notification_enum import NotificationType
from ...models.family.families import Family
from ...models.family.family_members import FamilyMember
from ...schemas.family.family_schemas import (
    FamilyCreate, FamilyJoinRequest, FamilyMemberOut, FamilyOut, FamilySettingsOut,
    FamilySettingsUpdate, MemberCreate, MemberListResponse, NotificationToggles
)
from ..system import notifications_crud

logger = logging.getLogger(__name__)

INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_invite_code(length: int = None) -> str:
    length = length or settings.INVITE_CODE_LENGTH
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


def _unused_invite_code(db: Session) -> str:
    # regenerate on collision; the unique column still backs this up
    for _ in range(settings.INVITE_CODE_MAX_ATTEMPTS):
        code = generate_invite_code()
        if not db.query(Family.id).filter(Family.invite_code == code).first():
            return code
    return _invite_codes_exhausted()


def _invite_codes_exhausted():
    return error_response(
        message="Could not allocate an invite code, please retry",
        status_code=AppStatusCode.CONFLICT,
        http_status=409
    )


# ----------------- Membership resolution -----------------

def get_active_membership(db: Session, user_id: UUID) -> Optional[FamilyMember]:
    return (
        db.query(FamilyMember)
        .filter(FamilyMember.user_id == user_id,
                FamilyMember.status == MemberStatus.active)
        .first()
    )


def resolve_membership(db: Session, user_id: UUID) -> FamilyMember:
    """Tenant + role of the caller; every scoped operation starts here."""
    membership = get_active_membership(db, user_id)
    if not membership:
        return not_part_of_family()
    return membership


def require_capability(membership: FamilyMember, family_id: UUID, capability: Capability):
    # a path family id that is not the caller's own family is never trusted
    if membership.family_id != family_id or not has_capability(membership.role, capability):
        return forbidden()


def _ensure_not_member(db: Session, user_id: UUID):
    if get_active_membership(db, user_id):
        return conflict("User already belongs to a family")


# ----------------- Serialisation -----------------

def family_settings(family: Family) -> FamilySettingsOut:
    return FamilySettingsOut(
        notifications=NotificationToggles(
            low_stock=family.notify_low_stock,
            expiring_soon=family.notify_expiring_soon,
            expired=family.notify_expired,
            new_items=family.notify_new_items,
        ),
        low_stock_threshold=family.low_stock_threshold,
        expiry_warning_days=family.expiry_warning_days,
    )


def active_members(db: Session, family_id: UUID):
    return (
        db.query(FamilyMember)
        .options(joinedload(FamilyMember.user))
        .filter(FamilyMember.family_id == family_id,
                FamilyMember.status == MemberStatus.active)
        .order_by(FamilyMember.joined_at.asc())
        .all()
    )


def family_out(db: Session, family: Family, role: Optional[FamilyRole] = None) -> FamilyOut:
    return FamilyOut(
        id=family.id,
        name=family.name,
        invite_code=family.invite_code,
        owner_id=family.owner_id,
        settings=family_settings(family),
        members=[FamilyMemberOut.model_validate(m) for m in active_members(db, family.id)],
        role=role,
        created_at=family.created_at,
    )


# ----------------- Create / Join -----------------

def create_family(db: Session, owner_user_id: UUID, request: FamilyCreate) -> FamilyOut:
    _ensure_not_member(db, owner_user_id)

    for _ in range(settings.INVITE_CODE_MAX_ATTEMPTS):
        invite_code = _unused_invite_code(db)
        family = Family(
            name=request.name,
            invite_code=invite_code,
            owner_id=owner_user_id,
            low_stock_threshold=settings.DEFAULT_LOW_STOCK_THRESHOLD,
            expiry_warning_days=settings.DEFAULT_EXPIRY_WARNING_DAYS,
        )
        db.add(family)
        try:
            db.flush()
            db.add(FamilyMember(family_id=family.id, user_id=owner_user_id, role=FamilyRole.owner))
            db.commit()
        except IntegrityError:
            db.rollback()
            # either another create/join for this user won, or the invite code was taken meanwhile
            _ensure_not_member(db, owner_user_id)
            logger.warning("Invite code %s taken concurrently, retrying", invite_code)
            continue

        db.refresh(family)
        logger.info("Family %s created by user %s", family.id, owner_user_id)
        return family_out(db, family, FamilyRole.owner)

    return _invite_codes_exhausted()


def join_family(db: Session, user_id: UUID, request: FamilyJoinRequest) -> FamilyOut:
    _ensure_not_member(db, user_id)

    family = db.query(Family).filter(
        Family.invite_code == request.invite_code.upper()).first()
    if not family:
        return error_response(
            message="Invalid invite code",
            status_code=AppStatusCode.INVALID_INVITE_CODE,
            http_status=404
        )

    db.add(FamilyMember(family_id=family.id, user_id=user_id, role=FamilyRole.member))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return conflict("User already belongs to a family")

    user = db.query(Users).filter(Users.id == user_id).first()
    notifications_crud.notify(
        db,
        family.id,
        NotificationType.member_joined,
        title="New family member",
        message=f"{user.name if user else 'Someone'} joined {family.name}",
        data={"user_id": str(user_id)},
    )
    logger.info("User %s joined family %s", user_id, family.id)
    return family_out(db, family, FamilyRole.member)


def get_my_family(db: Session, user_id: UUID) -> FamilyOut:
    membership = resolve_membership(db, user_id)
    return family_out(db, membership.family, membership.role)


# ----------------- Members -----------------

def add_member(db: Session, acting_user_id: UUID, family_id: UUID, request: MemberCreate) -> FamilyMemberOut:
    membership = resolve_membership(db, acting_user_id)
    require_capability(membership, family_id, Capability.add_member)

    if request.role == FamilyRole.owner:
        return forbidden("A family can only have one owner")

    user = db.query(Users).filter(Users.phone == request.phone).first()
    if user:
        existing = get_active_membership(db, user.id)
        if existing:
            return conflict("User is already a family member"
                            if existing.family_id == family_id else "User already belongs to a family")
    else:
        user = Users(name=request.name, phone=request.phone)
        db.add(user)
        db.flush()

    member = FamilyMember(family_id=family_id, user_id=user.id, role=request.role)
    db.add(member)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return conflict("User already belongs to a family")

    db.refresh(member)
    logger.info("User %s added to family %s by %s", user.id, family_id, acting_user_id)
    return FamilyMemberOut.model_validate(member)


def list_members(db: Session, user_id: UUID, family_id: UUID) -> MemberListResponse:
    membership = resolve_membership(db, user_id)
    if membership.family_id != family_id:
        return forbidden("Access denied")

    members = active_members(db, family_id)
    return MemberListResponse(
        members=[FamilyMemberOut.model_validate(m) for m in members],
        total=len(members),
    )


def _deactivate(db: Session, member: FamilyMember):
    member.status = MemberStatus.removed
    member.left_at = datetime.now(timezone.utc)
    db.commit()


def remove_member(db: Session, acting_user_id: UUID, family_id: UUID, member_user_id: UUID) -> FamilyMemberOut:
    membership = resolve_membership(db, acting_user_id)
    require_capability(membership, family_id, Capability.remove_member)

    member = (
        db.query(FamilyMember)
        .filter(FamilyMember.family_id == family_id,
                FamilyMember.user_id == member_user_id,
                FamilyMember.status == MemberStatus.active)
        .first()
    )
    if not member:
        return not_found("Member")
    if member.role == FamilyRole.owner:
        return forbidden("The family owner cannot be removed")

    _deactivate(db, member)
    db.refresh(member)
    logger.info("User %s removed from family %s by %s", member_user_id, family_id, acting_user_id)
    return FamilyMemberOut.model_validate(member)


def leave_family(db: Session, user_id: UUID) -> FamilyMemberOut:
    membership = resolve_membership(db, user_id)
    if membership.role == FamilyRole.owner:
        return forbidden("The family owner cannot leave the family")

    _deactivate(db, membership)
    db.refresh(membership)
    logger.info("User %s left family %s", user_id, membership.family_id)
    return FamilyMemberOut.model_validate(membership)


# ----------------- Settings -----------------

def update_settings(db: Session, acting_user_id: UUID, family_id: UUID, update_data: FamilySettingsUpdate) -> FamilySettingsOut:
    membership = resolve_membership(db, acting_user_id)
    require_capability(membership, family_id, Capability.update_settings)

    family = membership.family

    #-------- Notification toggles --------
    if update_data.notifications:
        for field, value in update_data.notifications.model_dump(exclude_none=True).items():
            setattr(family, f"notify_{field}", value)

    #-------- Thresholds --------
    for field, value in update_data.model_dump(exclude_unset=True, exclude={"notifications"}).items():
        if value is not None:
            setattr(family, field, value)

    db.commit()
    db.refresh(family)
    return family_settings(family)
