from enum import Enum


class RecordStatus(str, Enum):
    active = "active"
    deleted = "deleted"


class ProductCategory(str, Enum):
    dairy = "dairy"
    fruits = "fruits"
    vegetables = "vegetables"
    bakery = "bakery"
    meat = "meat"
    snacks = "snacks"
    beverages = "beverages"
    canned = "canned"
    frozen = "frozen"
    household = "household"
    personal_care = "personal_care"
    other = "other"


class ExpiryStatus(str, Enum):
    fresh = "fresh"
    expiring = "expiring"
    expired = "expired"


class InventorySortField(str, Enum):
    name = "name"
    quantity = "quantity"
    expiry_date = "expiry_date"
    date_added = "date_added"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"
