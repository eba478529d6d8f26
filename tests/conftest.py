"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date

from agrovia.models import Firmness, StorageType
from agrovia.retail import BillBuilder, BillRegistry, InventoryLedger, OrderBook
from agrovia.tracking import BatchLedger, build_demo_farmers


@pytest.fixture
def today():
    """Fixed reference day for date arithmetic."""
    return date(2024, 1, 10)


@pytest.fixture
def ledger():
    """Ledger with the demo farmers and no batches."""
    return BatchLedger(farmers=build_demo_farmers())


@pytest.fixture
def demo_ledger(today):
    """Ledger seeded with the demo farmers and batches."""
    return BatchLedger.with_demo_data(today)


@pytest.fixture
def graded_tomato(ledger, today):
    """Grade A tomato batch in cold storage, 50 kg, harvested today (expires in 12 days)."""
    batch = ledger.intake_batch("tomato", "F001", 50, StorageType.COLD, today=today)
    return ledger.record_quality_test(batch.batch_id, 5, Firmness.HIGH, today=today)


@pytest.fixture
def inventory():
    """Fixture for an empty inventory ledger."""
    return InventoryLedger()


@pytest.fixture
def order_book(inventory):
    """Fixture for an order book sharing the inventory."""
    return OrderBook(inventory)


@pytest.fixture
def bill_registry():
    """Fixture for an empty bill registry."""
    return BillRegistry()


@pytest.fixture
def bill_builder(inventory, bill_registry):
    """Fixture for a bill builder sharing the inventory."""
    return BillBuilder(inventory, bill_registry)
