"""
Tests for the freshness calculation engine.

This module tests shelf life lookup, expiry and remaining-day arithmetic,
freshness classification and retail status derivation.
"""

import pytest
from datetime import date, datetime, timedelta

from agrovia.freshness import (
    get_base_shelf_life,
    get_shelf_life_modifier,
    calculate_shelf_life,
    calculate_expiry_date,
    calculate_remaining_days,
    determine_freshness_status,
    is_sale_allowed,
    calculate_days_since_harvest,
    build_retail_status,
)
from agrovia.models import (
    PRODUCTS,
    FreshnessStatus,
    QualityGrade,
    RetailStatus,
    StorageType,
)

# Lower rank = more expired
STATUS_RANK = {
    FreshnessStatus.EXPIRED: 0,
    FreshnessStatus.CONSUME_SOON: 1,
    FreshnessStatus.FRESH: 2,
}


class TestShelfLife:
    """Tests for shelf life calculation."""

    @pytest.mark.parametrize("grade,normal,cold", [
        (QualityGrade.A, 7, 12),
        (QualityGrade.B, 5, 9),
        (QualityGrade.C, 3, 6),
    ])
    def test_base_shelf_life_table(self, grade, normal, cold):
        """Test base shelf life per grade and storage type."""
        assert get_base_shelf_life(grade, StorageType.NORMAL) == normal
        assert get_base_shelf_life(grade, StorageType.COLD) == cold

    def test_accepts_string_values(self):
        """Test that enum string values are accepted."""
        assert get_base_shelf_life("A", "Cold") == 12
        assert calculate_shelf_life("C", "Normal", "lettuce") == 1

    @pytest.mark.parametrize("grade,storage,product_id,expected", [
        (QualityGrade.A, StorageType.COLD, "tomato", 12),
        (QualityGrade.B, StorageType.NORMAL, "potato", 15),
        (QualityGrade.C, StorageType.NORMAL, "lettuce", 1),     # 3 x 0.4 = 1.2
        (QualityGrade.C, StorageType.NORMAL, "banana", 2),      # 3 x 0.6 = 1.8
        (QualityGrade.A, StorageType.NORMAL, "spinach", 4),     # 7 x 0.5 = 3.5, half up
        (QualityGrade.B, StorageType.NORMAL, "spinach", 3),     # 5 x 0.5 = 2.5, half up
        (QualityGrade.B, StorageType.COLD, "onion", 23),        # 9 x 2.5 = 22.5, half up
    ])
    def test_product_modifier_applied(self, grade, storage, product_id, expected):
        """Test shelf life with product modifiers and half-up rounding."""
        assert calculate_shelf_life(grade, storage, product_id) == expected

    def test_unknown_product_uses_neutral_modifier(self):
        """Test that unknown or missing products fall back to modifier 1.0."""
        assert get_shelf_life_modifier("dragonfruit") == 1.0
        assert get_shelf_life_modifier(None) == 1.0
        assert calculate_shelf_life(QualityGrade.C, StorageType.COLD, "dragonfruit") == 6
        assert calculate_shelf_life(QualityGrade.A, StorageType.NORMAL) == 7

    @pytest.mark.parametrize("grade", list(QualityGrade))
    def test_cold_outlasts_normal(self, grade):
        """Test cold storage always gives a longer shelf life than normal storage."""
        assert get_base_shelf_life(grade, StorageType.COLD) > get_base_shelf_life(grade, StorageType.NORMAL)
        for product in PRODUCTS:
            cold = calculate_shelf_life(grade, StorageType.COLD, product.id)
            normal = calculate_shelf_life(grade, StorageType.NORMAL, product.id)
            assert cold > normal, product.id


class TestExpiryDate:
    """Tests for expiry date calculation."""

    def test_grade_a_cold_tomato(self):
        """Test grade A cold tomato harvested 2024-01-01 expires 2024-01-13."""
        expiry = calculate_expiry_date(date(2024, 1, 1), QualityGrade.A, StorageType.COLD, "tomato")
        assert expiry == date(2024, 1, 13)

    def test_datetime_harvest_truncated(self):
        """Test that a harvest datetime is truncated to its day."""
        expiry = calculate_expiry_date(
            datetime(2024, 1, 1, 18, 30), QualityGrade.A, StorageType.COLD, "tomato"
        )
        assert expiry == date(2024, 1, 13)
        assert type(expiry) is date

    def test_later_harvest_later_expiry(self):
        """Test expiry is monotonic in harvest date."""
        harvest = date(2024, 3, 1)
        previous = None
        for offset in range(10):
            expiry = calculate_expiry_date(
                harvest + timedelta(days=offset), QualityGrade.B, StorageType.NORMAL, "mango"
            )
            if previous is not None:
                assert expiry > previous
            previous = expiry


class TestRemainingDays:
    """Tests for remaining shelf life days."""

    def test_remaining_days(self):
        """Test whole days until expiry."""
        assert calculate_remaining_days(date(2024, 1, 13), date(2024, 1, 10)) == 3

    def test_time_of_day_ignored(self):
        """Test that both sides are truncated to midnight."""
        assert calculate_remaining_days(datetime(2024, 1, 13, 0, 1), datetime(2024, 1, 10, 23, 59)) == 3

    def test_negative_after_expiry(self):
        """Test remaining days go negative once expired."""
        assert calculate_remaining_days(date(2024, 1, 13), date(2024, 1, 15)) == -2

    def test_defaults_to_current_day(self):
        """Test that today defaults to the current local date."""
        assert calculate_remaining_days(date.today() + timedelta(days=5)) == 5

    def test_days_since_harvest(self):
        """Test days elapsed since harvest."""
        assert calculate_days_since_harvest(date(2024, 1, 1), date(2024, 1, 10)) == 9
        assert calculate_days_since_harvest(date(2024, 1, 10), date(2024, 1, 10)) == 0


class TestFreshnessStatus:
    """Tests for freshness classification."""

    @pytest.mark.parametrize("remaining,expected", [
        (10, FreshnessStatus.FRESH),
        (4, FreshnessStatus.FRESH),
        (3, FreshnessStatus.CONSUME_SOON),
        (1, FreshnessStatus.CONSUME_SOON),
        (0, FreshnessStatus.EXPIRED),
        (-5, FreshnessStatus.EXPIRED),
    ])
    def test_step_function(self, remaining, expected):
        """Test classification boundaries."""
        assert determine_freshness_status(remaining) == expected

    def test_status_values(self):
        """Test display values of the statuses."""
        assert str(FreshnessStatus.CONSUME_SOON) == "Consume Soon"
        assert FreshnessStatus("Expired") == FreshnessStatus.EXPIRED

    def test_monotonic(self):
        """Test that more remaining days never gives a more expired status."""
        for remaining in range(-10, 20):
            lower = STATUS_RANK[determine_freshness_status(remaining)]
            higher = STATUS_RANK[determine_freshness_status(remaining + 1)]
            assert higher >= lower

    @pytest.mark.parametrize("remaining", range(-3, 6))
    def test_sale_allowed_iff_not_expired(self, remaining):
        """Test remaining <= 0 <=> Expired <=> sale not allowed."""
        status = determine_freshness_status(remaining)
        assert (remaining <= 0) == (status == FreshnessStatus.EXPIRED)
        assert is_sale_allowed(status) == (remaining > 0)

    def test_lettuce_expires_day_after_harvest(self):
        """Test grade C lettuce in normal storage lasts a single day."""
        harvest = date(2024, 1, 10)
        expiry = calculate_expiry_date(harvest, QualityGrade.C, StorageType.NORMAL, "lettuce")
        assert expiry == date(2024, 1, 11)

        on_harvest_day = determine_freshness_status(calculate_remaining_days(expiry, harvest))
        day_after = determine_freshness_status(calculate_remaining_days(expiry, harvest + timedelta(days=1)))
        assert on_harvest_day == FreshnessStatus.CONSUME_SOON
        assert day_after == FreshnessStatus.EXPIRED


class TestRetailStatus:
    """Tests for retail status derivation."""

    def test_build_retail_status(self):
        """Test retail status for a batch three days from expiry."""
        status = build_retail_status("BTH-1", date(2024, 1, 13), date(2024, 1, 10))
        assert status.batch_id == "BTH-1"
        assert status.sell_by_date == date(2024, 1, 13)
        assert status.remaining_days == 3
        assert status.status == FreshnessStatus.CONSUME_SOON
        assert status.sale_allowed

    def test_build_retail_status_expired(self):
        """Test retail status on the expiry day."""
        status = build_retail_status("BTH-1", date(2024, 1, 13), date(2024, 1, 13))
        assert status.remaining_days == 0
        assert status.status == FreshnessStatus.EXPIRED
        assert not status.sale_allowed

    def test_status_changes_with_time(self):
        """Test the same expiry date classifies differently on later days."""
        expiry = date(2024, 1, 20)
        statuses = [
            build_retail_status("BTH-1", expiry, date(2024, 1, 10)).status,
            build_retail_status("BTH-1", expiry, date(2024, 1, 18)).status,
            build_retail_status("BTH-1", expiry, date(2024, 1, 21)).status,
        ]
        assert statuses == [
            FreshnessStatus.FRESH,
            FreshnessStatus.CONSUME_SOON,
            FreshnessStatus.EXPIRED,
        ]

    def test_inconsistent_sale_flag_rejected(self):
        """Test that sale_allowed must follow the status."""
        with pytest.raises(ValueError, match="inconsistent"):
            RetailStatus(
                batch_id="BTH-1",
                sell_by_date=date(2024, 1, 13),
                remaining_days=-1,
                status=FreshnessStatus.EXPIRED,
                sale_allowed=True,
            )
