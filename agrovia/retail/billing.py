"""Customer bills: building, finalising and looking up by code."""

import logging
from datetime import date as Date, datetime
from typing import Dict, List, Optional, Union

from ..constants import DEFAULT_RETAILER_ID
from ..freshness import retail_status_for_batch
from ..identifiers import generate_bill_id, generate_unique_code
from ..models import BatchWithDetails, Bill, BillItem, product_display_name, product_unit
from ..pricing import calculate_line_amount, get_product_price
from .inventory import InventoryLedger

logger = logging.getLogger(__name__)


class BillRegistry:
    """Finalised bills, searchable by their customer code."""

    def __init__(self):
        self._bills: Dict[str, Bill] = {}

    def add(self, bill: Bill) -> None:
        self._bills[bill.bill_id] = bill

    def get_all_bills(self) -> List[Bill]:
        return list(self._bills.values())

    def get_by_unique_code(self, code: str) -> Optional[Bill]:
        """Find a bill by its customer code, ignoring case and surrounding spaces."""
        wanted = code.strip().upper()
        for bill in self._bills.values():
            if bill.unique_code.upper() == wanted:
                return bill
        return None


class BillBuilder:
    """
    Assembles a customer bill line by line.

    Each line is priced from the batch's product and grade. Lines are checked
    against available stock, counting what is already on the bill; stock is
    reduced only when the bill is finalised.

    Example:
        builder = BillBuilder(inventory, registry)
        builder.add_item(batch, 5)
        bill = builder.finalize()
        print(bill.unique_code, bill.total_amount)
    """

    def __init__(
        self,
        inventory: InventoryLedger,
        registry: Optional[BillRegistry] = None,
        retailer_id: str = DEFAULT_RETAILER_ID
    ):
        self.inventory = inventory
        self.registry = registry
        self.retailer_id = retailer_id
        self.items: List[BillItem] = []

    def quantity_on_bill(self, batch_id: str) -> float:
        """Quantity of a batch already added to this bill."""
        return sum(item.quantity for item in self.items if item.batch_id.upper() == batch_id.upper())

    def add_item(
        self,
        batch: BatchWithDetails,
        quantity: float,
        crate_id: Optional[str] = None,
        today: Optional[Union[Date, datetime]] = None
    ) -> BillItem:
        """
        Add a line for a batch.

        Sale permission is recomputed for today from the stored expiry date;
        the retail status attached to the batch is not trusted.

        Args:
            batch: Batch as read from the ledger
            quantity: Quantity to sell
            crate_id: Crate the goods come from, if any
            today: Day of the sale (defaults to the current local date)

        Returns:
            The new bill line

        Raises:
            ValueError: If the batch is ungraded or not allowed for sale, the
                quantity is not positive, or it exceeds the remaining stock
        """
        if not batch.is_graded:
            raise ValueError(f"Batch {batch.batch_id} has not been quality tested")
        retail_status = retail_status_for_batch(batch, today)
        if retail_status is None or not retail_status.sale_allowed:
            raise ValueError(f"Batch {batch.batch_id} is expired and cannot be sold")
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive: {quantity}")

        available = self.inventory.get_available_quantity(batch.batch_id, batch.quantity)
        remaining = available - self.quantity_on_bill(batch.batch_id)
        if quantity > remaining:
            raise ValueError(
                f"Only {max(remaining, 0):g} {product_unit(batch.crop_type)} of batch "
                f"{batch.batch_id} left to bill"
            )

        price = get_product_price(batch.crop_type, batch.quality_grade)
        item = BillItem(
            batch_id=batch.batch_id,
            crate_id=crate_id,
            quantity=quantity,
            grade=batch.quality_grade,
            price_per_kg=price,
            amount=calculate_line_amount(batch.crop_type, batch.quality_grade, quantity),
            product_name=product_display_name(batch.crop_type),
        )
        self.items.append(item)
        return item

    def remove_item(self, index: int) -> BillItem:
        """Remove and return the line at index."""
        return self.items.pop(index)

    @property
    def total(self) -> float:
        return sum(item.amount for item in self.items)

    def finalize(self, created_at: Optional[datetime] = None) -> Bill:
        """
        Issue the bill, reduce inventory and start a new empty bill.

        Raises:
            ValueError: If the bill has no lines
        """
        if not self.items:
            raise ValueError("Cannot finalize an empty bill")

        bill = Bill(
            bill_id=generate_bill_id(),
            retailer_id=self.retailer_id,
            items=list(self.items),
            total_amount=self.total,
            created_at=created_at or datetime.now(),
            unique_code=generate_unique_code(),
        )
        for item in bill.items:
            self.inventory.reduce_inventory(item.batch_id, item.quantity)

        if self.registry is not None:
            self.registry.add(bill)

        self.items = []
        logger.info(
            f"Bill {bill.bill_id} ({bill.unique_code}): {len(bill.items)} items, "
            f"total Rs.{bill.total_amount:g}"
        )
        return bill
