"""Dashboard analytics and warehouse views over tracked batches.

Batches are flattened into a pandas DataFrame (one row per batch) and the
dashboard figures are aggregated from it.
"""

import logging
from dataclasses import dataclass, field
from datetime import date as Date
from typing import Dict, List, Optional

import pandas as pd

from ..constants import (
    AVERAGE_BATCH_QUANTITY_KG,
    URGENT_ALERT_THRESHOLD_DAYS,
    CONSUME_SOON_THRESHOLD_DAYS,
    WASTE_PREVENTION_RATE,
)
from ..freshness import retail_status_for_batch
from ..models import BatchWithDetails, FreshnessStatus, product_display_name
from ..pricing import get_product_price
from ..utils.conversions import round_half_up

logger = logging.getLogger(__name__)

BATCH_COLUMNS = [
    'batch_id',
    'crop_type',
    'product_name',
    'farmer_id',
    'harvest_date',
    'quantity',
    'grade',
    'storage_type',
    'expiry_date',
    'remaining_days',
    'status',
    'sale_allowed',
    'unit_price',
    'revenue',
]


def _current_retail_status(batch: BatchWithDetails, today: Optional[Date]):
    if today is not None or batch.retail_status is None:
        return retail_status_for_batch(batch, today)
    return batch.retail_status


def batches_to_frame(batches: List[BatchWithDetails], today: Optional[Date] = None) -> pd.DataFrame:
    """
    Flatten batches into a DataFrame.

    Args:
        batches: Batches to flatten
        today: If given, freshness is recomputed for this day; otherwise the
            retail status attached when the batch was read is used

    Returns:
        DataFrame with BATCH_COLUMNS; grade, status and price columns are None
        for batches without the corresponding data. Revenue is 0 for
        ungraded batches.
    """
    rows = []
    for batch in batches:
        retail_status = _current_retail_status(batch, today)
        grade = batch.quality_grade
        unit_price = get_product_price(batch.crop_type, grade) if grade is not None else None

        rows.append({
            'batch_id': batch.batch_id,
            'crop_type': batch.crop_type,
            'product_name': product_display_name(batch.crop_type),
            'farmer_id': batch.farmer_id,
            'harvest_date': batch.harvest_date,
            'quantity': batch.quantity,
            'grade': grade.value if grade is not None else None,
            'storage_type': batch.storage.storage_type.value if batch.storage else None,
            'expiry_date': batch.storage.expiry_date if batch.storage else None,
            'remaining_days': retail_status.remaining_days if retail_status else None,
            'status': retail_status.status.value if retail_status else None,
            'sale_allowed': retail_status.sale_allowed if retail_status else False,
            'unit_price': unit_price,
            'revenue': batch.quantity * unit_price if unit_price is not None else 0.0,
        })

    return pd.DataFrame(rows, columns=BATCH_COLUMNS)


@dataclass
class DashboardAnalytics:
    """
    Headline dashboard figures.

    Attributes:
        total_batches: Number of batches
        fresh_batches: Batches classified Fresh
        consume_soon_batches: Batches classified Consume Soon
        expired_batches: Batches classified Expired
        total_quantity: Sum of batch quantities
        expired_quantity: Sum of expired batch quantities
        potential_waste_prevented: Estimated kg saved by early warnings
        grade_stats: Batch count per grade letter
        prevented_sales_count: Expired batches blocked from sale
    """
    total_batches: int = 0
    fresh_batches: int = 0
    consume_soon_batches: int = 0
    expired_batches: int = 0
    total_quantity: float = 0.0
    expired_quantity: float = 0.0
    potential_waste_prevented: int = 0
    grade_stats: Dict[str, int] = field(default_factory=lambda: {'A': 0, 'B': 0, 'C': 0})
    prevented_sales_count: int = 0

    def __str__(self) -> str:
        """String representation."""
        return (
            f"{self.total_batches} batches: {self.fresh_batches} fresh, "
            f"{self.consume_soon_batches} consume soon, {self.expired_batches} expired"
        )


def get_analytics(batches: List[BatchWithDetails], today: Optional[Date] = None) -> DashboardAnalytics:
    """
    Compute headline dashboard figures.

    Waste prevented assumes 30% of Consume Soon batches would otherwise have
    expired, at an average of 25 kg per batch.
    """
    df = batches_to_frame(batches, today)
    status_counts = df['status'].value_counts()
    grade_counts = df['grade'].value_counts()

    consume_soon = int(status_counts.get(FreshnessStatus.CONSUME_SOON.value, 0))
    expired = int(status_counts.get(FreshnessStatus.EXPIRED.value, 0))

    analytics = DashboardAnalytics(
        total_batches=len(df),
        fresh_batches=int(status_counts.get(FreshnessStatus.FRESH.value, 0)),
        consume_soon_batches=consume_soon,
        expired_batches=expired,
        total_quantity=float(df['quantity'].sum()),
        expired_quantity=float(df.loc[df['status'] == FreshnessStatus.EXPIRED.value, 'quantity'].sum()),
        potential_waste_prevented=round_half_up(
            consume_soon * WASTE_PREVENTION_RATE * AVERAGE_BATCH_QUANTITY_KG
        ),
        grade_stats={grade: int(grade_counts.get(grade, 0)) for grade in ('A', 'B', 'C')},
        prevented_sales_count=expired,
    )
    logger.debug(f"Dashboard analytics: {analytics}")
    return analytics


@dataclass
class ExpiryAlert:
    """Warning for a batch close to expiry."""
    batch_id: str
    remaining_days: int
    level: str  # "urgent" or "warning"
    message: str


def expiry_alerts(batches: List[BatchWithDetails], today: Optional[Date] = None) -> List[ExpiryAlert]:
    """
    Alerts for batches with 1 to 3 days left.

    Batches with one day left are urgent; expired batches raise no alert.
    """
    alerts = []
    for batch in batches:
        retail_status = _current_retail_status(batch, today)
        if retail_status is None:
            continue

        remaining = retail_status.remaining_days
        if not 0 < remaining <= CONSUME_SOON_THRESHOLD_DAYS:
            continue

        if remaining <= URGENT_ALERT_THRESHOLD_DAYS:
            alerts.append(ExpiryAlert(
                batch_id=batch.batch_id,
                remaining_days=remaining,
                level="urgent",
                message=f"URGENT: {batch.batch_id} expires tomorrow!",
            ))
        else:
            alerts.append(ExpiryAlert(
                batch_id=batch.batch_id,
                remaining_days=remaining,
                level="warning",
                message=f"Warning: {batch.batch_id} expires in {remaining} days",
            ))
    return alerts


def filter_warehouse_batches(
    batches: List[BatchWithDetails],
    status: Optional[FreshnessStatus] = None,
    query: Optional[str] = None,
    today: Optional[Date] = None
) -> List[BatchWithDetails]:
    """
    Graded batches for the warehouse view, soonest expiry first.

    Args:
        batches: Candidate batches
        status: Keep only this freshness status (all if None)
        query: Keep only batch ids containing this text (case-insensitive)
        today: Day to evaluate freshness for

    Returns:
        Matching batches sorted by remaining days ascending
    """
    wanted_status = FreshnessStatus(status) if status is not None else None
    needle = query.strip().lower() if query else None

    matches = []
    for batch in batches:
        if not batch.is_graded:
            continue
        retail_status = _current_retail_status(batch, today)
        if wanted_status is not None and (retail_status is None or retail_status.status != wanted_status):
            continue
        if needle and needle not in batch.batch_id.lower():
            continue
        if retail_status is not batch.retail_status:
            batch = batch.model_copy(update={'retail_status': retail_status})
        matches.append(batch)

    return sorted(matches, key=lambda b: b.remaining_days if b.remaining_days is not None else 0)
