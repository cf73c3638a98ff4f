# app/models/inventory/inventory_items.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Date, DateTime, Enum, Float, ForeignKey, Index, String, Text, Uuid, func, text
from sqlalchemy.orm import relationship
from shared.core.database import Base
from ...enum.inventory_enum import ProductCategory, RecordStatus


def _utcnow():
    return datetime.now(timezone.utc)


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    family_id = Column(Uuid(as_uuid=True), ForeignKey("families.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    barcode = Column(String(64))
    quantity = Column(Float, nullable=False, default=0)
    unit = Column(String(32), nullable=False, default="pieces")
    category = Column(Enum(ProductCategory), nullable=False, default=ProductCategory.other)
    expiry_date = Column(Date, nullable=True)
    image_url = Column(Text)
    notes = Column(Text)
    added_by = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)

    status = Column(Enum(RecordStatus), nullable=False, default=RecordStatus.active)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    added_by_user = relationship("Users")


# Guards merge-on-add against two concurrent inserts of the same name
Index(
    "uq_inventory_items_family_lower_name_active",
    InventoryItem.family_id,
    func.lower(InventoryItem.name),
    unique=True,
    postgresql_where=text("status = 'active'"),
    sqlite_where=text("status = 'active'"),
)
