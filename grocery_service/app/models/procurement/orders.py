# app/models/procurement/orders.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Enum, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship
from shared.core.database import Base
from ...enum.procurement_enum import OrderStatus


def _utcnow():
    return datetime.now(timezone.utc)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    family_id = Column(Uuid(as_uuid=True), ForeignKey("families.id"), nullable=False, index=True)
    merchant_id = Column(Uuid(as_uuid=True), ForeignKey("merchants.id"), nullable=True)
    status = Column(Enum(OrderStatus), nullable=False, default=OrderStatus.pending)
    notes = Column(Text)
    created_by = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)

    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    merchant = relationship("Merchant")
    created_by_user = relationship("Users")
    items = relationship("OrderItem", back_populates="order",
                         cascade="all, delete-orphan", order_by="OrderItem.position")
