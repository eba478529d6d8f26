"""
Unit tests for the data models.
"""

import pytest
from datetime import date, datetime
from pydantic import ValidationError

from agrovia.constants import BASE_PRICE_PER_UNIT, PRODUCT_SHELF_LIFE_MODIFIER
from agrovia.models import (
    PRODUCTS,
    Batch,
    Bill,
    BillItem,
    BatchWithDetails,
    Firmness,
    FreshnessStatus,
    Order,
    OrderStatus,
    QualityGrade,
    QualityTest,
    RetailStatus,
    get_product_by_id,
    product_display_name,
    product_unit,
)


class TestProductCatalog:
    """Tests for the product catalog."""

    def test_catalog_ids_unique(self):
        """Test every product id appears once."""
        ids = [p.id for p in PRODUCTS]
        assert len(ids) == 20
        assert len(set(ids)) == len(ids)

    def test_catalog_has_rules(self):
        """Test every product has a shelf life modifier and a base price."""
        for product in PRODUCTS:
            assert product.id in PRODUCT_SHELF_LIFE_MODIFIER
            assert product.id in BASE_PRICE_PER_UNIT

    def test_lookup(self):
        """Test lookups with fallbacks for unknown ids."""
        assert get_product_by_id("tomato").name == "Tomato"
        assert get_product_by_id("dragonfruit") is None
        assert product_display_name("dragonfruit") == "dragonfruit"
        assert product_unit("banana") == "dozen"
        assert product_unit("dragonfruit") == "kg"


class TestBatch:
    """Tests for Batch models."""

    def test_create_batch(self):
        """Test creating an ungraded batch."""
        batch = Batch(
            batch_id="BTH-1",
            crop_type="tomato",
            harvest_date=date(2024, 1, 1),
            farmer_id="F001",
            quantity=50,
        )
        assert batch.quality_grade is None
        assert not batch.is_graded
        assert "ungraded" in str(batch)

    def test_quantity_must_be_positive(self):
        """Test zero quantity is rejected."""
        with pytest.raises(ValidationError):
            Batch(
                batch_id="BTH-1",
                crop_type="tomato",
                harvest_date=date(2024, 1, 1),
                farmer_id="F001",
                quantity=0,
            )

    def test_frozen(self):
        """Test batches cannot be mutated in place."""
        batch = Batch(
            batch_id="BTH-1",
            crop_type="tomato",
            harvest_date=date(2024, 1, 1),
            farmer_id="F001",
            quantity=50,
        )
        with pytest.raises(ValidationError):
            batch.quality_grade = QualityGrade.A

    def test_details_without_status(self):
        """Test derived properties before a retail status is attached."""
        batch = BatchWithDetails(
            batch_id="BTH-1",
            crop_type="tomato",
            harvest_date=date(2024, 1, 1),
            farmer_id="F001",
            quantity=50,
        )
        assert batch.status is None
        assert batch.remaining_days is None
        assert batch.sale_allowed is False


class TestQualityTest:
    """Tests for the QualityTest model."""

    @pytest.mark.parametrize("visual", [0, 6])
    def test_visual_quality_range(self, visual):
        """Test visual quality outside 1..5."""
        with pytest.raises(ValidationError):
            QualityTest(
                test_id="TEST-BTH-1",
                batch_id="BTH-1",
                visual_quality=visual,
                freshness_days=5,
                firmness=Firmness.HIGH,
                final_grade=QualityGrade.A,
                test_date=date(2024, 1, 1),
            )


class TestRetailStatus:
    """Tests for the RetailStatus model."""

    @pytest.mark.parametrize("status,sale_allowed", [
        (FreshnessStatus.FRESH, True),
        (FreshnessStatus.CONSUME_SOON, True),
        (FreshnessStatus.EXPIRED, False),
    ])
    def test_consistent(self, status, sale_allowed):
        """Test consistent status and sale flag."""
        retail = RetailStatus(
            batch_id="BTH-1",
            sell_by_date=date(2024, 1, 13),
            remaining_days=3,
            status=status,
            sale_allowed=sale_allowed,
        )
        assert retail.sale_allowed == sale_allowed

    def test_fresh_not_for_sale_rejected(self):
        """Test Fresh with sale disallowed."""
        with pytest.raises(ValidationError, match="inconsistent"):
            RetailStatus(
                batch_id="BTH-1",
                sell_by_date=date(2024, 1, 13),
                remaining_days=5,
                status=FreshnessStatus.FRESH,
                sale_allowed=False,
            )


class TestRetailModels:
    """Tests for orders and bills."""

    def test_order_defaults(self):
        """Test a new order is pending."""
        order = Order(order_id="ORD-1", retailer_id="RET-001", batch_id="BTH-1", quantity=5)
        assert order.status == OrderStatus.PENDING

    def test_bill_total_must_match(self):
        """Test a bill total that disagrees with its lines."""
        item = BillItem(
            batch_id="BTH-1",
            quantity=5,
            grade=QualityGrade.A,
            price_per_kg=48,
            amount=240,
        )
        bill = Bill(
            bill_id="BILL-1",
            retailer_id="RET-001",
            items=[item],
            total_amount=240,
            created_at=datetime(2024, 1, 10),
            unique_code="ABCD1234",
        )
        assert bill.total_amount == 240

        with pytest.raises(ValidationError, match="does not match"):
            Bill(
                bill_id="BILL-2",
                retailer_id="RET-001",
                items=[item],
                total_amount=200,
                unique_code="ABCD1235",
            )
