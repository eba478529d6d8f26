"""
In-memory batch ledger covering intake, quality grading and retail reads.

The ledger stores batches with their storage expiry dates. Retail status is
never stored: every read recomputes it for the requested day, so the same
batch can move from Fresh to Consume Soon to Expired between reads.
"""

import logging
import random
import string
from datetime import date as Date, datetime
from typing import Dict, Iterable, List, Optional, Union

from ..constants import PROVISIONAL_INTAKE_GRADE, MIN_VISUAL_QUALITY, MAX_VISUAL_QUALITY
from ..freshness import (
    calculate_expiry_date,
    calculate_remaining_days,
    build_retail_status,
    determine_grade_from_inspection,
)
from ..identifiers import generate_batch_id, generate_qr_id
from ..models import (
    BatchWithDetails,
    Farmer,
    Firmness,
    QRMapping,
    QualityTest,
    StorageRecord,
    StorageType,
    get_product_by_id,
)
from ..utils.conversions import to_date, today_or

logger = logging.getLogger(__name__)

DateLike = Union[Date, datetime]


class BatchLedger:
    """
    Registry of farmers and produce batches.

    Lifecycle of a batch:
    1. intake_batch() creates it ungraded, with a provisional expiry
       computed as if it were grade B
    2. record_quality_test() grades it and recomputes the expiry
    3. reads (get_batch, get_all_batches, ...) attach a fresh RetailStatus

    There is no per-batch deletion; reset() restores the initial state.

    Example:
        ledger = BatchLedger.with_demo_data()
        batch = ledger.intake_batch("tomato", "F001", 50, StorageType.COLD)
        graded = ledger.record_quality_test(batch.batch_id, 5, Firmness.HIGH)
        print(graded.retail_status.status)
    """

    def __init__(
        self,
        farmers: Optional[Iterable[Farmer]] = None,
        batches: Optional[Iterable[BatchWithDetails]] = None
    ):
        """
        Initialize the ledger.

        Args:
            farmers: Initial farmers (restored by reset())
            batches: Initial batches (restored by reset())
        """
        self._initial_farmers: List[Farmer] = list(farmers or [])
        self._initial_batches: List[BatchWithDetails] = list(batches or [])
        self._farmers: Dict[str, Farmer] = {}
        self._batches: Dict[str, BatchWithDetails] = {}
        self.reset()

    @classmethod
    def with_demo_data(cls, today: Optional[DateLike] = None) -> 'BatchLedger':
        """Create a ledger seeded with the demo farmers and batches."""
        from .seed import build_demo_farmers, build_demo_batches

        return cls(
            farmers=build_demo_farmers(),
            batches=build_demo_batches(today),
        )

    def reset(self) -> None:
        """Bulk reset to the initial farmers and batches."""
        self._farmers = {farmer.farmer_id: farmer for farmer in self._initial_farmers}
        self._batches = {}
        for batch in self._initial_batches:
            self._batches[batch.batch_id.upper()] = batch
        logger.info(
            f"Ledger reset: {len(self._farmers)} farmers, {len(self._batches)} batches"
        )

    # ------------------------------------------------------------------
    # Farmers
    # ------------------------------------------------------------------

    def register_farmer(self, name: str, farmer_code: Optional[str] = None) -> Farmer:
        """
        Register a new farmer with the next sequential id (F001, F002, ...).

        Args:
            name: Farmer name
            farmer_code: Registration code (generated as FRM-XXX if omitted)

        Returns:
            The registered farmer
        """
        if not name or not name.strip():
            raise ValueError("Farmer name must not be empty")

        farmer_id = f"F{len(self._farmers) + 1:03d}"
        while farmer_id in self._farmers:
            farmer_id = f"F{int(farmer_id[1:]) + 1:03d}"

        if farmer_code is None:
            suffix = "".join(random.choices(string.ascii_uppercase + string.digits, k=3))
            farmer_code = f"FRM-{suffix}"

        farmer = Farmer(farmer_id=farmer_id, farmer_code=farmer_code, name=name.strip())
        self._farmers[farmer_id] = farmer
        logger.info(f"Registered farmer {farmer}")
        return farmer

    def get_farmer(self, farmer_id: str) -> Optional[Farmer]:
        return self._farmers.get(farmer_id)

    def get_all_farmers(self) -> List[Farmer]:
        return list(self._farmers.values())

    # ------------------------------------------------------------------
    # Intake and grading
    # ------------------------------------------------------------------

    def intake_batch(
        self,
        product_id: str,
        farmer_id: str,
        quantity: float,
        storage_type: StorageType = StorageType.NORMAL,
        harvest_date: Optional[DateLike] = None,
        today: Optional[DateLike] = None
    ) -> BatchWithDetails:
        """
        Record a newly delivered, ungraded batch.

        The storage expiry is provisional: it is computed with grade B until
        the batch is quality tested.

        Args:
            product_id: Product id of the produce
            farmer_id: Delivering farmer (must be registered)
            quantity: Delivered quantity (> 0)
            storage_type: Storage chosen at intake
            harvest_date: Harvest date (defaults to today)
            today: Intake day (defaults to the current local date)

        Returns:
            The new batch with its retail status for today

        Raises:
            ValueError: If the farmer is unknown or the quantity is not positive
        """
        farmer = self._farmers.get(farmer_id)
        if farmer is None:
            raise ValueError(f"Unknown farmer: {farmer_id}")
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive: {quantity}")
        if get_product_by_id(product_id) is None:
            logger.warning(f"Product '{product_id}' is not in the catalog, using default rules")

        intake_day = today_or(today)
        harvest = to_date(harvest_date) if harvest_date is not None else intake_day
        storage_type = StorageType(storage_type)

        batch_id = generate_batch_id()
        while batch_id.upper() in self._batches:
            batch_id = generate_batch_id()
        expiry_date = calculate_expiry_date(
            harvest, PROVISIONAL_INTAKE_GRADE, storage_type, product_id
        )

        batch = BatchWithDetails(
            batch_id=batch_id,
            crop_type=product_id,
            harvest_date=harvest,
            farmer_id=farmer_id,
            quantity=quantity,
            quality_grade=None,
            farmer=farmer,
            storage=StorageRecord(
                batch_id=batch_id,
                storage_type=storage_type,
                entry_date=intake_day,
                expected_shelf_life=(expiry_date - harvest).days,
                expiry_date=expiry_date,
            ),
            qr_mapping=QRMapping(
                qr_id=generate_qr_id(),
                batch_id=batch_id,
                public_url=f"/scan/{batch_id}",
            ),
        )
        self._batches[batch_id.upper()] = batch
        logger.info(
            f"Intake {batch_id}: {quantity:g} {product_id} from {farmer_id}, "
            f"{storage_type.value} storage, provisional expiry {expiry_date}"
        )
        return self._with_retail_status(batch, intake_day)

    def record_quality_test(
        self,
        batch_id: str,
        visual_quality: int,
        firmness: Firmness,
        today: Optional[DateLike] = None
    ) -> BatchWithDetails:
        """
        Grade a batch and recompute its storage expiry.

        The storage type chosen at intake is kept; the expiry is recomputed
        from the harvest date with the derived grade.

        Args:
            batch_id: Batch to grade (case-insensitive)
            visual_quality: Visual quality score from 1 to 5
            firmness: Firmness category
            today: Test day (defaults to the current local date)

        Returns:
            The graded batch with its retail status for today

        Raises:
            ValueError: If the batch is unknown, already graded, or the score
                is out of range
        """
        batch = self._batches.get(batch_id.upper())
        if batch is None:
            raise ValueError(f"Unknown batch: {batch_id}")
        if batch.is_graded:
            raise ValueError(f"Batch {batch.batch_id} is already graded ({batch.quality_grade.value})")
        if not MIN_VISUAL_QUALITY <= visual_quality <= MAX_VISUAL_QUALITY:
            raise ValueError(
                f"Visual quality must be between {MIN_VISUAL_QUALITY} and "
                f"{MAX_VISUAL_QUALITY}: {visual_quality}"
            )

        test_day = today_or(today)
        firmness = Firmness(firmness)
        grade = determine_grade_from_inspection(visual_quality, firmness)

        storage_type = batch.storage.storage_type if batch.storage else StorageType.NORMAL
        entry_date = batch.storage.entry_date if batch.storage else test_day
        expiry_date = calculate_expiry_date(batch.harvest_date, grade, storage_type, batch.crop_type)

        quality_test = QualityTest(
            test_id=f"TEST-{batch.batch_id}",
            batch_id=batch.batch_id,
            visual_quality=visual_quality,
            freshness_days=calculate_remaining_days(expiry_date, test_day),
            firmness=firmness,
            final_grade=grade,
            test_date=test_day,
        )
        storage = StorageRecord(
            batch_id=batch.batch_id,
            storage_type=storage_type,
            entry_date=entry_date,
            expected_shelf_life=(expiry_date - batch.harvest_date).days,
            expiry_date=expiry_date,
        )

        graded = batch.model_copy(update={
            'quality_grade': grade,
            'quality_test': quality_test,
            'storage': storage,
            'retail_status': None,
        })
        self._batches[batch.batch_id.upper()] = graded
        logger.info(
            f"Graded {batch.batch_id} as {grade.value} "
            f"(visual {visual_quality}, firmness {firmness.value}), expiry {expiry_date}"
        )
        return self._with_retail_status(graded, test_day)

    # ------------------------------------------------------------------
    # Reads (retail status recomputed every time)
    # ------------------------------------------------------------------

    def get_batch(self, batch_id: str, today: Optional[DateLike] = None) -> Optional[BatchWithDetails]:
        """Look up a batch by id (case-insensitive), None if absent."""
        batch = self._batches.get(batch_id.strip().upper())
        if batch is None:
            return None
        return self._with_retail_status(batch, today)

    def get_all_batches(self, today: Optional[DateLike] = None) -> List[BatchWithDetails]:
        """All batches in intake order, with retail status for today."""
        day = today_or(today)
        return [self._with_retail_status(batch, day) for batch in self._batches.values()]

    def untested_batches(self, today: Optional[DateLike] = None) -> List[BatchWithDetails]:
        """Batches waiting for quality testing."""
        return [b for b in self.get_all_batches(today) if not b.is_graded]

    def tested_batches(self, today: Optional[DateLike] = None) -> List[BatchWithDetails]:
        """Batches that have a quality grade."""
        return [b for b in self.get_all_batches(today) if b.is_graded]

    def find_by_qr(self, qr_id: str, today: Optional[DateLike] = None) -> Optional[BatchWithDetails]:
        """Resolve a scanned QR id to its batch."""
        for batch in self._batches.values():
            if batch.qr_mapping and batch.qr_mapping.qr_id.upper() == qr_id.strip().upper():
                return self._with_retail_status(batch, today)
        return None

    def __len__(self) -> int:
        return len(self._batches)

    def __contains__(self, batch_id: str) -> bool:
        return batch_id.upper() in self._batches

    @staticmethod
    def _with_retail_status(
        batch: BatchWithDetails,
        today: Optional[DateLike] = None
    ) -> BatchWithDetails:
        if batch.storage is None:
            return batch
        retail_status = build_retail_status(batch.batch_id, batch.storage.expiry_date, today)
        return batch.model_copy(update={'retail_status': retail_status})
