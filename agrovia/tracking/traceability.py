"""Batch traceability timeline from harvest to retail."""

from dataclasses import dataclass, field
from datetime import date as Date
from typing import Dict, List, Optional

from ..freshness import build_retail_status
from ..models import BatchWithDetails, product_display_name, product_unit
from ..utils.conversions import today_or


@dataclass
class TraceEvent:
    """
    One step in the history of a batch.

    Attributes:
        kind: "Harvest", "Quality", "Storage" or "Retail"
        event_date: Day the step happened (the query day for Retail)
        actor: Who performed the step
        details: Step-specific values for display
    """
    kind: str
    event_date: Date
    actor: str
    details: Dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.event_date} {self.kind} by {self.actor}: {detail_str}"


def trace_batch(batch: BatchWithDetails, today: Optional[Date] = None) -> List[TraceEvent]:
    """
    Build the traceability timeline of a batch.

    Steps without data are skipped: an ungraded batch has no Quality event.
    The Retail event reflects the freshness on the query day.

    Args:
        batch: Batch to trace
        today: Query day (defaults to the current local date)

    Returns:
        Events in lifecycle order
    """
    query_day = today_or(today)
    unit = product_unit(batch.crop_type)

    events = [
        TraceEvent(
            kind="Harvest",
            event_date=batch.harvest_date,
            actor=batch.farmer.name if batch.farmer else batch.farmer_id,
            details={
                "crop": product_display_name(batch.crop_type),
                "quantity": f"{batch.quantity:g}{unit}",
            },
        )
    ]

    if batch.quality_test is not None:
        events.append(TraceEvent(
            kind="Quality",
            event_date=batch.quality_test.test_date,
            actor="Quality Inspection",
            details={
                "grade": batch.quality_test.final_grade.value,
                "score": f"{batch.quality_test.visual_quality}/5",
                "firmness": batch.quality_test.firmness.value,
            },
        ))

    if batch.storage is not None:
        events.append(TraceEvent(
            kind="Storage",
            event_date=batch.storage.entry_date,
            actor="Central Warehouse",
            details={
                "storage": batch.storage.storage_type.value,
                "expiry": batch.storage.expiry_date.isoformat(),
            },
        ))

        retail_status = build_retail_status(batch.batch_id, batch.storage.expiry_date, query_day)
        events.append(TraceEvent(
            kind="Retail",
            event_date=query_day,
            actor="Retail",
            details={
                "status": retail_status.status.value,
                "remaining_days": str(retail_status.remaining_days),
                "sale_allowed": "Yes" if retail_status.sale_allowed else "No",
            },
        ))

    return events
