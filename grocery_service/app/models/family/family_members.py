# app/models/family/family_members.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Uuid, text
from sqlalchemy.orm import relationship
from shared.core.database import Base
from ...enum.family_enum import FamilyRole, MemberStatus


class FamilyMember(Base):
    __tablename__ = "family_members"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    family_id = Column(Uuid(as_uuid=True), ForeignKey("families.id"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    role = Column(Enum(FamilyRole), nullable=False, default=FamilyRole.member)
    status = Column(Enum(MemberStatus), nullable=False, default=MemberStatus.active)
    joined_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    left_at = Column(DateTime(timezone=True), nullable=True)

    family = relationship("Family", back_populates="members")
    user = relationship("Users")

    __table_args__ = (
        # a user holds at most one active membership, across all families
        Index(
            "uq_family_members_active_user",
            "user_id",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )
