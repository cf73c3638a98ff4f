# app/models/procurement/order_items.py
import uuid
from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship
from shared.core.database import Base


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid(as_uuid=True), ForeignKey(
        "orders.id", ondelete="CASCADE"), nullable=False, index=True)
    # back-reference only; the name below is a snapshot and never re-derived
    inventory_item_id = Column(Uuid(as_uuid=True), ForeignKey("inventory_items.id"), nullable=True)
    name = Column(String(200), nullable=False)
    quantity = Column(Float, nullable=False)
    unit = Column(String(32), nullable=False, default="pieces")
    notes = Column(Text)
    position = Column(Integer, nullable=False, default=0)

    order = relationship("Order", back_populates="items")
