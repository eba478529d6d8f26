"""Report aggregations: waste, farmer performance, revenue and daily trend."""

from dataclasses import dataclass
from datetime import date as Date, timedelta
from typing import List, Optional

import pandas as pd

from ..constants import MAX_TREND_DAYS, QUALITY_SCORE_WEIGHTS, WASTE_PREVENTION_RATE
from ..models import Bill, BatchWithDetails, Farmer, FreshnessStatus, get_product_by_id
from ..utils.conversions import round_half_up, to_date, today_or
from .dashboard import batches_to_frame

GRADE_LABELS = {
    'A': 'Grade A (Premium)',
    'B': 'Grade B (Standard)',
    'C': 'Grade C (Economy)',
}


def filter_batches_by_harvest_date(
    batches: List[BatchWithDetails],
    start: Date,
    end: Date
) -> List[BatchWithDetails]:
    """Batches harvested between start and end (inclusive)."""
    start, end = to_date(start), to_date(end)
    if end < start:
        raise ValueError(f"end ({end}) must be >= start ({start})")
    return [b for b in batches if start <= b.harvest_date <= end]


def filter_bills_by_date(bills: List[Bill], start: Date, end: Date) -> List[Bill]:
    """Bills issued between start and end (inclusive, by calendar day)."""
    start, end = to_date(start), to_date(end)
    if end < start:
        raise ValueError(f"end ({end}) must be >= start ({start})")
    return [b for b in bills if start <= b.created_at.date() <= end]


@dataclass
class WasteMetrics:
    """
    Waste reduction figures for a set of batches.

    Attributes:
        total_batches: Number of batches
        fresh_batches: Batches classified Fresh
        consume_soon_batches: Batches classified Consume Soon
        expired_batches: Batches classified Expired
        expired_quantity: Sum of expired quantities
        waste_rate: Expired share of total quantity in percent (1 decimal)
        waste_prevented: Quantity sold before expiry thanks to early warnings
    """
    total_batches: int
    fresh_batches: int
    consume_soon_batches: int
    expired_batches: int
    expired_quantity: float
    waste_rate: float
    waste_prevented: int


def waste_metrics(batches: List[BatchWithDetails], today: Optional[Date] = None) -> WasteMetrics:
    """
    Compute waste figures.

    Waste prevented counts 30% of every Consume Soon batch, rounded per batch.
    """
    df = batches_to_frame(batches, today)

    expired = df[df['status'] == FreshnessStatus.EXPIRED.value]
    consume_soon = df[df['status'] == FreshnessStatus.CONSUME_SOON.value]

    total_quantity = float(df['quantity'].sum())
    expired_quantity = float(expired['quantity'].sum())
    waste_rate = round(expired_quantity / total_quantity * 100, 1) if total_quantity > 0 else 0.0

    return WasteMetrics(
        total_batches=len(df),
        fresh_batches=int((df['status'] == FreshnessStatus.FRESH.value).sum()),
        consume_soon_batches=len(consume_soon),
        expired_batches=len(expired),
        expired_quantity=expired_quantity,
        waste_rate=waste_rate,
        waste_prevented=sum(
            round_half_up(quantity * WASTE_PREVENTION_RATE) for quantity in consume_soon['quantity']
        ),
    )


def farmer_performance(
    batches: List[BatchWithDetails],
    farmers: List[Farmer],
    today: Optional[Date] = None
) -> pd.DataFrame:
    """
    Per-farmer grade counts, quantity, revenue and quality score.

    Quality score is the grade-weighted average (A 100, B 70, C 40) over all
    of the farmer's batches, ungraded ones counting as zero.

    Returns:
        DataFrame sorted by quality_score, best first
    """
    df = batches_to_frame(batches, today)
    columns = [
        'farmer_id', 'farmer_code', 'name', 'total_batches',
        'grade_a', 'grade_b', 'grade_c', 'total_quantity', 'revenue', 'quality_score',
    ]

    rows = []
    for farmer in farmers:
        farmer_df = df[df['farmer_id'] == farmer.farmer_id]
        grade_counts = farmer_df['grade'].value_counts()
        counts = {grade: int(grade_counts.get(grade, 0)) for grade in ('A', 'B', 'C')}
        total = len(farmer_df)

        weighted = sum(QUALITY_SCORE_WEIGHTS[grade] * count for grade, count in counts.items())
        rows.append({
            'farmer_id': farmer.farmer_id,
            'farmer_code': farmer.farmer_code,
            'name': farmer.name,
            'total_batches': total,
            'grade_a': counts['A'],
            'grade_b': counts['B'],
            'grade_c': counts['C'],
            'total_quantity': float(farmer_df['quantity'].sum()),
            'revenue': float(farmer_df['revenue'].sum()),
            'quality_score': round_half_up(weighted / total) if total > 0 else 0,
        })

    result = pd.DataFrame(rows, columns=columns)
    return result.sort_values('quality_score', ascending=False, kind='mergesort').reset_index(drop=True)


def revenue_by_product(batches: List[BatchWithDetails], today: Optional[Date] = None) -> pd.DataFrame:
    """
    Revenue, quantity and grade counts per product, highest revenue first.

    Only graded batches of catalog products count.
    """
    df = batches_to_frame(batches, today)
    in_catalog = df['crop_type'].map(lambda product_id: get_product_by_id(product_id) is not None)
    graded = df[df['grade'].notna() & in_catalog.astype(bool)].copy()
    columns = ['name', 'revenue', 'quantity', 'grade_a', 'grade_b', 'grade_c']
    if graded.empty:
        return pd.DataFrame(columns=columns)

    for grade in ('A', 'B', 'C'):
        graded[f'grade_{grade.lower()}'] = (graded['grade'] == grade).astype(int)

    result = (
        graded.groupby('product_name', sort=False)
        .agg(
            revenue=('revenue', 'sum'),
            quantity=('quantity', 'sum'),
            grade_a=('grade_a', 'sum'),
            grade_b=('grade_b', 'sum'),
            grade_c=('grade_c', 'sum'),
        )
        .reset_index()
        .rename(columns={'product_name': 'name'})
    )
    return result.sort_values('revenue', ascending=False, kind='mergesort').reset_index(drop=True)[columns]


def revenue_by_grade(batches: List[BatchWithDetails], today: Optional[Date] = None) -> pd.DataFrame:
    """Revenue per grade, always listing A, B and C."""
    df = batches_to_frame(batches, today)
    totals = df[df['grade'].notna()].groupby('grade')['revenue'].sum()

    return pd.DataFrame([
        {'grade': grade, 'label': label, 'revenue': float(totals.get(grade, 0.0))}
        for grade, label in GRADE_LABELS.items()
    ])


def daily_trend(
    batches: List[BatchWithDetails],
    bills: List[Bill],
    days: int = 7,
    today: Optional[Date] = None
) -> pd.DataFrame:
    """
    Harvested batches, quantity and billed revenue per day.

    Args:
        batches: Batches (bucketed by harvest date)
        bills: Bills (bucketed by issue date)
        days: Window length, capped at 14 days
        today: Last day of the window (defaults to the current local date)

    Returns:
        DataFrame with one row per day, oldest first
    """
    if days < 1:
        raise ValueError(f"days must be >= 1: {days}")
    days = min(days, MAX_TREND_DAYS)
    end = today_or(today)

    rows = []
    for offset in range(days - 1, -1, -1):
        day = end - timedelta(days=offset)
        day_batches = [b for b in batches if b.harvest_date == day]
        day_bills = [b for b in bills if b.created_at.date() == day]
        rows.append({
            'date': day,
            'label': f"{day:%b} {day.day}",
            'batches': len(day_batches),
            'quantity': float(sum(b.quantity for b in day_batches)),
            'revenue': float(sum(b.total_amount for b in day_bills)),
        })

    return pd.DataFrame(rows, columns=['date', 'label', 'batches', 'quantity', 'revenue'])