"""Sold-quantity tracking per batch."""

import logging
from typing import Dict, List

from ..models import InventoryRecord

logger = logging.getLogger(__name__)


class InventoryLedger:
    """
    Tracks how much of each batch has been sold.

    Batches keep their delivered quantity; availability is the delivered
    quantity minus what has been sold, floored at zero.
    """

    def __init__(self):
        self._records: Dict[str, InventoryRecord] = {}

    def get_records(self) -> List[InventoryRecord]:
        return list(self._records.values())

    def get_sold_quantity(self, batch_id: str) -> float:
        """Quantity sold from a batch (0 if nothing was sold)."""
        record = self._records.get(batch_id.upper())
        return record.sold_quantity if record else 0.0

    def get_available_quantity(self, batch_id: str, total_quantity: float) -> float:
        """Unsold quantity of a batch, never negative."""
        return max(0.0, total_quantity - self.get_sold_quantity(batch_id))

    def reduce_inventory(self, batch_id: str, quantity: float) -> InventoryRecord:
        """
        Record a sale from a batch.

        Args:
            batch_id: Batch sold from
            quantity: Sold quantity (> 0)

        Returns:
            Updated inventory record

        Raises:
            ValueError: If quantity is not positive
        """
        if quantity <= 0:
            raise ValueError(f"Sold quantity must be positive: {quantity}")

        key = batch_id.upper()
        sold = self.get_sold_quantity(key) + quantity
        record = InventoryRecord(batch_id=key, sold_quantity=sold)
        self._records[key] = record
        logger.debug(f"Inventory {key}: sold {quantity:g}, total sold {sold:g}")
        return record

    def reset(self) -> None:
        self._records.clear()
