from enum import Enum


class NotificationType(str, Enum):
    low_stock = "low_stock"
    expiring_soon = "expiring_soon"
    expired = "expired"
    new_item = "new_item"
    order_created = "order_created"
    order_completed = "order_completed"
    member_joined = "member_joined"
    custom = "custom"
