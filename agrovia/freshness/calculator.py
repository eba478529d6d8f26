"""
Shelf life and freshness business rules.

This module computes the shelf life of a batch from its grade, storage type
and product, derives the expiry date from the harvest date, and classifies
the remaining shelf life into a freshness status.

All functions are total over their documented inputs: unknown product ids
fall back to a neutral modifier instead of raising.
"""

from datetime import date as Date, datetime, timedelta
from typing import Optional, Union

from ..constants import (
    SHELF_LIFE_RULES,
    PRODUCT_SHELF_LIFE_MODIFIER,
    DEFAULT_SHELF_LIFE_MODIFIER,
    CONSUME_SOON_THRESHOLD_DAYS,
)
from ..models import BatchWithDetails, QualityGrade, StorageType, FreshnessStatus, RetailStatus
from ..utils.conversions import round_half_up, to_date, today_or

DateLike = Union[Date, datetime]


def get_base_shelf_life(grade: QualityGrade, storage_type: StorageType) -> int:
    """
    Base shelf life in days for a grade and storage type.

    Args:
        grade: Quality grade (enum or "A"/"B"/"C")
        storage_type: Storage type (enum or "Normal"/"Cold")

    Returns:
        Days from the SHELF_LIFE_RULES table
    """
    grade = QualityGrade(grade)
    storage_type = StorageType(storage_type)
    return SHELF_LIFE_RULES[grade.value][storage_type.value]


def get_shelf_life_modifier(product_id: Optional[str]) -> float:
    """Product-specific shelf life multiplier, 1.0 for unknown or missing ids."""
    if not product_id:
        return DEFAULT_SHELF_LIFE_MODIFIER
    return PRODUCT_SHELF_LIFE_MODIFIER.get(product_id, DEFAULT_SHELF_LIFE_MODIFIER)


def calculate_shelf_life(
    grade: QualityGrade,
    storage_type: StorageType,
    product_id: Optional[str] = None
) -> int:
    """
    Calculate shelf life in whole days.

    Base shelf life (grade x storage type) times the product modifier,
    rounded to the nearest day with halves rounded up.

    Args:
        grade: Quality grade
        storage_type: Storage type
        product_id: Product id (optional, unknown ids use modifier 1.0)

    Returns:
        Shelf life in days

    Example:
        >>> calculate_shelf_life(QualityGrade.C, StorageType.NORMAL, "lettuce")
        1
    """
    base_shelf_life = get_base_shelf_life(grade, storage_type)
    modifier = get_shelf_life_modifier(product_id)
    return round_half_up(base_shelf_life * modifier)


def calculate_expiry_date(
    harvest_date: DateLike,
    grade: QualityGrade,
    storage_type: StorageType,
    product_id: Optional[str] = None
) -> Date:
    """
    Calculate the expiry date of a batch.

    Args:
        harvest_date: Date of harvest (datetimes are truncated to the day)
        grade: Quality grade
        storage_type: Storage type
        product_id: Product id (optional)

    Returns:
        harvest_date + shelf life days
    """
    shelf_life = calculate_shelf_life(grade, storage_type, product_id)
    return to_date(harvest_date) + timedelta(days=shelf_life)


def calculate_remaining_days(expiry_date: DateLike, today: Optional[DateLike] = None) -> int:
    """
    Whole days from today until the expiry date.

    Both sides are truncated to midnight before subtracting, so the result
    only changes when the calendar day changes.

    Args:
        expiry_date: Expiry date of the batch
        today: Reference day (defaults to the current local date)

    Returns:
        Remaining days, negative once the expiry date has passed
    """
    return (to_date(expiry_date) - today_or(today)).days


def determine_freshness_status(remaining_days: int) -> FreshnessStatus:
    """
    Classify remaining shelf life.

    - remaining_days > 3: Fresh
    - 1 <= remaining_days <= 3: Consume Soon
    - remaining_days <= 0: Expired (the expiry day itself counts as expired)
    """
    if remaining_days > CONSUME_SOON_THRESHOLD_DAYS:
        return FreshnessStatus.FRESH
    if remaining_days >= 1:
        return FreshnessStatus.CONSUME_SOON
    return FreshnessStatus.EXPIRED


def is_sale_allowed(status: FreshnessStatus) -> bool:
    """Batches may be sold unless expired."""
    return FreshnessStatus(status) != FreshnessStatus.EXPIRED


def calculate_days_since_harvest(harvest_date: DateLike, today: Optional[DateLike] = None) -> int:
    """Whole days elapsed since harvest."""
    return (today_or(today) - to_date(harvest_date)).days


def build_retail_status(
    batch_id: str,
    expiry_date: DateLike,
    today: Optional[DateLike] = None
) -> RetailStatus:
    """
    Compute the retail view of a batch for a given day.

    Args:
        batch_id: Batch ID
        expiry_date: Stored expiry date of the batch
        today: Reference day (defaults to the current local date)

    Returns:
        RetailStatus with remaining days, status and sale permission
    """
    remaining_days = calculate_remaining_days(expiry_date, today)
    status = determine_freshness_status(remaining_days)
    return RetailStatus(
        batch_id=batch_id,
        sell_by_date=to_date(expiry_date),
        remaining_days=remaining_days,
        status=status,
        sale_allowed=is_sale_allowed(status),
    )


def retail_status_for_batch(
    batch: BatchWithDetails,
    today: Optional[DateLike] = None
) -> Optional[RetailStatus]:
    """
    Recompute the retail view of a batch from its stored expiry date.

    Any retail status already attached to the batch is ignored, so a batch
    read on an earlier day is judged by its freshness on today.

    Returns:
        RetailStatus for today, or None if the batch has no storage record
    """
    if batch.storage is None:
        return None
    return build_retail_status(batch.batch_id, batch.storage.expiry_date, today)
