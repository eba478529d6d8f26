"""Batch data models for tracking harvested produce from intake to retail."""

from datetime import date as Date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .farmer import Farmer
from .product import QualityGrade, StorageType, FreshnessStatus, Firmness


class Batch(BaseModel):
    """
    A tracked unit of harvested produce from one farmer.

    A batch is created ungraded at intake (quality_grade is None) and gets its
    grade once quality testing is done.

    Attributes:
        batch_id: Unique batch identifier (e.g. "BTH-LX3K9Q2A-7F2C")
        crop_type: Product id of the produce (e.g. "tomato")
        harvest_date: Date of harvest
        farmer_id: Farmer who delivered the batch
        quantity: Delivered quantity in the product's selling unit
        quality_grade: Grade assigned by inspection, None until tested
        created_at: Time the batch was recorded
    """
    model_config = ConfigDict(frozen=True)

    batch_id: str = Field(..., description="Unique batch identifier")
    crop_type: str = Field(..., description="Product ID")
    harvest_date: Date = Field(..., description="Date of harvest")
    farmer_id: str = Field(..., description="Farmer ID")
    quantity: float = Field(..., description="Delivered quantity", gt=0)
    quality_grade: Optional[QualityGrade] = Field(
        None,
        description="Quality grade (None until tested)"
    )
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="Time the batch was recorded"
    )

    @property
    def is_graded(self) -> bool:
        """Check if the batch has been quality tested."""
        return self.quality_grade is not None

    def __str__(self) -> str:
        """String representation."""
        grade = self.quality_grade.value if self.quality_grade else "ungraded"
        return (
            f"Batch {self.batch_id}: {self.quantity:g} of {self.crop_type} "
            f"harvested {self.harvest_date} ({grade})"
        )


class QualityTest(BaseModel):
    """
    Result of a quality inspection.

    Attributes:
        test_id: Test identifier ("TEST-<batch_id>")
        batch_id: Inspected batch
        visual_quality: Visual quality score, 1 (poor) to 5 (excellent)
        freshness_days: Remaining shelf life days at the time of the test
        firmness: Firmness category
        final_grade: Grade derived from visual quality and firmness
        test_date: Date of the inspection
    """
    model_config = ConfigDict(frozen=True)

    test_id: str = Field(..., description="Test identifier")
    batch_id: str = Field(..., description="Batch ID")
    visual_quality: int = Field(..., description="Visual quality score", ge=1, le=5)
    freshness_days: int = Field(..., description="Remaining days at test time")
    firmness: Firmness = Field(..., description="Firmness category")
    final_grade: QualityGrade = Field(..., description="Derived grade")
    test_date: Date = Field(..., description="Inspection date")


class StorageRecord(BaseModel):
    """
    Storage assignment of a batch and its computed expiry date.

    Attributes:
        batch_id: Stored batch
        storage_type: Normal or Cold storage
        entry_date: Date the batch entered storage
        expected_shelf_life: Shelf life in days from harvest
        expiry_date: Harvest date plus expected shelf life
    """
    model_config = ConfigDict(frozen=True)

    batch_id: str = Field(..., description="Batch ID")
    storage_type: StorageType = Field(..., description="Storage type")
    entry_date: Date = Field(..., description="Storage entry date")
    expected_shelf_life: int = Field(..., description="Shelf life in days", ge=0)
    expiry_date: Date = Field(..., description="Computed expiry date")


class RetailStatus(BaseModel):
    """
    Derived retail view of a batch for a given day.

    This is time-varying derived data: it is recomputed from the storage
    expiry date every time a batch is read and is never persisted.

    Attributes:
        batch_id: Batch ID
        sell_by_date: Last day the batch may be sold (the expiry date)
        remaining_days: Whole days until expiry, negative once past
        status: Freshness classification of remaining_days
        sale_allowed: False exactly when status is Expired
    """
    model_config = ConfigDict(frozen=True)

    batch_id: str = Field(..., description="Batch ID")
    sell_by_date: Date = Field(..., description="Sell-by date")
    remaining_days: int = Field(..., description="Remaining shelf life days")
    status: FreshnessStatus = Field(..., description="Freshness status")
    sale_allowed: bool = Field(..., description="Whether the batch may be sold")

    @model_validator(mode='after')
    def validate_sale_allowed(self):
        """Sale permission must follow the freshness status."""
        expected = self.status != FreshnessStatus.EXPIRED
        if self.sale_allowed != expected:
            raise ValueError(
                f"sale_allowed={self.sale_allowed} is inconsistent with status '{self.status.value}'"
            )
        return self


class QRMapping(BaseModel):
    """QR code printed on a batch label, pointing at the public scan page."""
    model_config = ConfigDict(frozen=True)

    qr_id: str = Field(..., description="QR identifier")
    batch_id: str = Field(..., description="Batch ID")
    public_url: str = Field(..., description="Public scan URL path")


class BatchWithDetails(Batch):
    """
    A batch together with everything recorded about it.

    Attributes:
        quality_test: Inspection result (None until tested)
        storage: Storage record with expiry date
        retail_status: Retail view computed for the day the batch was read
        qr_mapping: QR label mapping
        farmer: Delivering farmer
    """
    quality_test: Optional[QualityTest] = None
    storage: Optional[StorageRecord] = None
    retail_status: Optional[RetailStatus] = None
    qr_mapping: Optional[QRMapping] = None
    farmer: Optional[Farmer] = None

    @property
    def status(self) -> Optional[FreshnessStatus]:
        """Freshness status of the last read, None without retail status."""
        return self.retail_status.status if self.retail_status else None

    @property
    def remaining_days(self) -> Optional[int]:
        """Remaining days of the last read, None without retail status."""
        return self.retail_status.remaining_days if self.retail_status else None

    @property
    def sale_allowed(self) -> bool:
        """Whether the batch may be sold as of the last read."""
        return bool(self.retail_status and self.retail_status.sale_allowed)
