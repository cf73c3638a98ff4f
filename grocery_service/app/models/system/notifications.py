# app/models/system/notifications.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import JSON, Column, DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from shared.core.database import Base
from ...enum.notification_enum import NotificationType

JsonType = JSON().with_variant(JSONB, "postgresql")


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    family_id = Column(Uuid(as_uuid=True), ForeignKey("families.id"), nullable=False, index=True)

    type = Column(Enum(NotificationType), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    data = Column(JsonType)
    recipients = Column(JsonType, nullable=False)   # list of user id strings
    sent_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)

    reads = relationship("NotificationRead", back_populates="notification",
                         cascade="all, delete-orphan")
