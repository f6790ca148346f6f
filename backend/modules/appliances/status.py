"""
Warranty and maintenance status derivation.

Pure functions: the current time is always passed in, so results depend
only on the arguments. Naive datetimes are taken to be UTC.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from dateutil.relativedelta import relativedelta

from .models import MaintenanceStatus, WarrantyStatus

EXPIRING_SOON_DAYS = 30

_ONE_DAY = timedelta(days=1)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def warranty_end_date(purchase_date: datetime, warranty_duration_months: int) -> datetime:
    """
    Purchase date plus the warranty length in calendar months.

    Month ends clamp: Jan 31 + 1 month is the last day of February.
    """
    if warranty_duration_months < 1:
        raise ValueError("warranty_duration_months must be at least 1")
    return as_utc(purchase_date) + relativedelta(months=warranty_duration_months)


def days_until(end: datetime, now: datetime) -> int:
    """Whole days from ``now`` to ``end``, truncated toward zero."""
    return int((as_utc(end) - as_utc(now)) / _ONE_DAY)


def warranty_status(
    purchase_date: datetime,
    warranty_duration_months: int,
    now: datetime,
    expiring_soon_days: int = EXPIRING_SOON_DAYS,
) -> WarrantyStatus:
    """
    Derive the warranty status.

    Args:
        purchase_date: When the appliance was bought
        warranty_duration_months: Warranty length (>= 1)
        now: Evaluation time
        expiring_soon_days: Remaining whole days at or below which an active
            warranty counts as expiring soon

    Returns:
        EXPIRED once ``now`` is strictly after the end date, EXPIRING_SOON
        when at most ``expiring_soon_days`` whole days remain, else ACTIVE.
    """
    end = warranty_end_date(purchase_date, warranty_duration_months)
    now = as_utc(now)

    if now > end:
        return WarrantyStatus.EXPIRED
    if days_until(end, now) <= expiring_soon_days:
        return WarrantyStatus.EXPIRING_SOON
    return WarrantyStatus.ACTIVE


def maintenance_status(
    scheduled_date: datetime,
    completed_date: Optional[datetime],
    now: datetime,
) -> MaintenanceStatus:
    """
    Derive the maintenance status.

    A completion date always wins; otherwise a task scheduled strictly
    before ``now`` is overdue and anything else is upcoming.
    """
    if completed_date is not None:
        return MaintenanceStatus.COMPLETED
    if as_utc(scheduled_date) < as_utc(now):
        return MaintenanceStatus.OVERDUE
    return MaintenanceStatus.UPCOMING
