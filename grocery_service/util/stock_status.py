from datetime import date
from typing import Optional

from grocery_service.app.enum.inventory_enum import ExpiryStatus

DEFAULT_EXPIRY_WARNING_DAYS = 2


def days_until_expiry(expiry_date: Optional[date], today: date) -> Optional[int]:
    if expiry_date is None:
        return None
    return (expiry_date - today).days


def classify_expiry(expiry_date: Optional[date], today: date,
                    expiry_warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS) -> ExpiryStatus:
    """Bucket an item by its expiry date relative to ``today``.

    No date means fresh. A date before today is expired; anything from today up
    to ``expiry_warning_days`` ahead (inclusive) is expiring.
    """
    days = days_until_expiry(expiry_date, today)
    if days is None:
        return ExpiryStatus.fresh
    if days < 0:
        return ExpiryStatus.expired
    if days <= expiry_warning_days:
        return ExpiryStatus.expiring
    return ExpiryStatus.fresh


def is_low_stock(quantity: float, threshold: int) -> bool:
    return quantity <= threshold
