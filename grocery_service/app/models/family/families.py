# app/models/family/families.py
import uuid
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Family(Base):
    __tablename__ = "families"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    invite_code = Column(String(16), nullable=False, unique=True, index=True)
    owner_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)

    # ---------- Notification toggles ----------
    notify_low_stock = Column(Boolean, nullable=False, default=True)
    notify_expiring_soon = Column(Boolean, nullable=False, default=True)
    notify_expired = Column(Boolean, nullable=False, default=True)
    notify_new_items = Column(Boolean, nullable=False, default=True)

    # ---------- Thresholds ----------
    low_stock_threshold = Column(Integer, nullable=False, default=1)
    expiry_warning_days = Column(Integer, nullable=False, default=2)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    members = relationship("FamilyMember", back_populates="family")
