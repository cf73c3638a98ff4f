# app/models/system/notification_reads.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from shared.core.database import Base


class NotificationRead(Base):
    __tablename__ = "notification_reads"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    notification_id = Column(Uuid(as_uuid=True), ForeignKey(
        "notifications.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    read_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    notification = relationship("Notification", back_populates="reads")

    __table_args__ = (
        UniqueConstraint("notification_id", "user_id",
                         name="uq_notification_read_user"),
    )
