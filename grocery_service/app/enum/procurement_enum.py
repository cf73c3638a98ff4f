from enum import Enum


class MerchantType(str, Enum):
    grocery = "grocery"
    supermarket = "supermarket"
    wholesale = "wholesale"
    specialty = "specialty"


class OrderStatus(str, Enum):
    pending = "pending"
    processing = "processing"
    completed = "completed"
    cancelled = "cancelled"
