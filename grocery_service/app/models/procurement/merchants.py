# app/models/procurement/merchants.py
import uuid
from sqlalchemy import JSON, Column, DateTime, Enum, ForeignKey, Numeric, String, Text, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from shared.core.database import Base
from ...enum.inventory_enum import RecordStatus
from ...enum.procurement_enum import MerchantType

JsonType = JSON().with_variant(JSONB, "postgresql")


class Merchant(Base):
    __tablename__ = "merchants"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    family_id = Column(Uuid(as_uuid=True), ForeignKey("families.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    type = Column(Enum(MerchantType), nullable=False, default=MerchantType.grocery)
    phone = Column(String(20))
    email = Column(String(200))
    address = Column(JsonType)       # {"street":..., "city":..., "state":..., "zip_code":..., "country":...}
    categories = Column(JsonType)    # ["dairy", "bakery", ...]
    rating = Column(Numeric(3, 2))
    notes = Column(Text)

    status = Column(Enum(RecordStatus), nullable=False, default=RecordStatus.active)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())
