"""Demo farmers and batches used to seed a fresh ledger.

Batches are harvested relative to the seeding day, so the demo always shows
both sellable and expired stock (spinach and banana have expired).
"""

from datetime import date as Date, datetime, timedelta
from typing import List, Optional, Union

from ..freshness import calculate_expiry_date, calculate_remaining_days
from ..identifiers import generate_batch_id, generate_qr_id
from ..models import (
    BatchWithDetails,
    Farmer,
    Firmness,
    QRMapping,
    QualityGrade,
    QualityTest,
    StorageRecord,
    StorageType,
)
from ..utils.conversions import today_or

DEMO_FARMERS = [
    ("F001", "FRM-A1X", "Farmer A"),
    ("F002", "FRM-B2Y", "Farmer B"),
    ("F003", "FRM-C3Z", "Farmer C"),
]

# (farmer_id, days_ago, quantity, grade, storage_type, product_id)
DEMO_BATCHES = [
    ("F001", 2, 50, QualityGrade.A, StorageType.COLD, "tomato"),
    ("F002", 5, 30, QualityGrade.B, StorageType.NORMAL, "potato"),
    ("F001", 8, 25, QualityGrade.A, StorageType.NORMAL, "spinach"),
    ("F003", 1, 40, QualityGrade.A, StorageType.COLD, "apple"),
    ("F002", 4, 35, QualityGrade.B, StorageType.COLD, "carrot"),
    ("F003", 3, 20, QualityGrade.C, StorageType.NORMAL, "banana"),
    ("F001", 6, 45, QualityGrade.B, StorageType.COLD, "onion"),
    ("F002", 0, 60, QualityGrade.A, StorageType.COLD, "mango"),
]

# Inspection results recorded for demo batches of each grade
_DEMO_INSPECTIONS = {
    QualityGrade.A: (5, Firmness.HIGH),
    QualityGrade.B: (3, Firmness.MEDIUM),
    QualityGrade.C: (2, Firmness.LOW),
}


def build_demo_farmers() -> List[Farmer]:
    return [
        Farmer(farmer_id=farmer_id, farmer_code=code, name=name)
        for farmer_id, code, name in DEMO_FARMERS
    ]


def build_demo_batch(
    farmer: Farmer,
    harvest_date: Date,
    quantity: float,
    grade: QualityGrade,
    storage_type: StorageType,
    product_id: str = "tomato"
) -> BatchWithDetails:
    """
    Build a graded demo batch, inspected and stored on its harvest day.

    Args:
        farmer: Delivering farmer
        harvest_date: Harvest (and inspection) date
        quantity: Batch quantity
        grade: Grade the demo inspection results map to
        storage_type: Storage type
        product_id: Product id

    Returns:
        Batch without retail status (attached by the ledger on read)
    """
    batch_id = generate_batch_id()
    expiry_date = calculate_expiry_date(harvest_date, grade, storage_type, product_id)
    visual_quality, firmness = _DEMO_INSPECTIONS[grade]

    return BatchWithDetails(
        batch_id=batch_id,
        crop_type=product_id,
        harvest_date=harvest_date,
        farmer_id=farmer.farmer_id,
        quantity=quantity,
        quality_grade=grade,
        created_at=datetime.combine(harvest_date, datetime.min.time()),
        farmer=farmer,
        quality_test=QualityTest(
            test_id=f"TEST-{batch_id}",
            batch_id=batch_id,
            visual_quality=visual_quality,
            freshness_days=calculate_remaining_days(expiry_date, harvest_date),
            firmness=firmness,
            final_grade=grade,
            test_date=harvest_date,
        ),
        storage=StorageRecord(
            batch_id=batch_id,
            storage_type=storage_type,
            entry_date=harvest_date,
            expected_shelf_life=(expiry_date - harvest_date).days,
            expiry_date=expiry_date,
        ),
        qr_mapping=QRMapping(
            qr_id=generate_qr_id(),
            batch_id=batch_id,
            public_url=f"/scan/{batch_id}",
        ),
    )


def build_demo_batches(today: Optional[Union[Date, datetime]] = None) -> List[BatchWithDetails]:
    """Demo batches harvested between 0 and 8 days before today."""
    seed_day = today_or(today)
    farmers = {farmer.farmer_id: farmer for farmer in build_demo_farmers()}

    batches = []
    seen_ids = set()
    for farmer_id, days_ago, quantity, grade, storage_type, product_id in DEMO_BATCHES:
        harvest_date = seed_day - timedelta(days=days_ago)
        batch = None
        while batch is None or batch.batch_id in seen_ids:
            batch = build_demo_batch(
                farmers[farmer_id], harvest_date, quantity, grade, storage_type, product_id
            )
        seen_ids.add(batch.batch_id)
        batches.append(batch)
    return batches
