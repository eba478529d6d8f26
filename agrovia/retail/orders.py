"""Retailer orders and warehouse crates."""

import logging
from datetime import date as Date, datetime
from typing import Dict, List, Optional, Union

from ..constants import DEFAULT_RETAILER_ID
from ..freshness import retail_status_for_batch
from ..identifiers import generate_order_id, generate_crate_id
from ..models import BatchWithDetails, Crate, Order, OrderStatus, product_unit
from .inventory import InventoryLedger

logger = logging.getLogger(__name__)


class OrderBook:
    """
    Orders placed by retailers and crates packed by the warehouse.

    Placing an order checks availability but does not reduce inventory;
    stock is only reduced when a bill is finalised.

    Example:
        book = OrderBook(inventory)
        order = book.place_order(batch, 10)
        book.update_order_status(order.order_id, OrderStatus.FULFILLED)
    """

    def __init__(self, inventory: Optional[InventoryLedger] = None):
        """
        Initialize the order book.

        Args:
            inventory: Inventory used for availability checks (new if None)
        """
        self.inventory = inventory or InventoryLedger()
        self._orders: Dict[str, Order] = {}
        self._crates: Dict[str, Crate] = {}

    def place_order(
        self,
        batch: BatchWithDetails,
        quantity: float,
        retailer_id: str = DEFAULT_RETAILER_ID,
        order_date: Optional[datetime] = None,
        today: Optional[Union[Date, datetime]] = None
    ) -> Order:
        """
        Place a pending order against a graded batch that may still be sold.

        Freshness is recomputed from the stored expiry date, so a batch read
        on an earlier day cannot be ordered once it has expired.

        Args:
            batch: Batch to order from
            quantity: Requested quantity
            retailer_id: Ordering retailer
            order_date: Order time (defaults to now)
            today: Day freshness is judged on (defaults to the order date)

        Returns:
            The pending order

        Raises:
            ValueError: If the batch is ungraded or expired, the quantity is not
                positive, or more than the available stock is requested
        """
        if not batch.is_graded:
            raise ValueError(f"Batch {batch.batch_id} has not been quality tested")
        if today is None:
            today = order_date
        retail_status = retail_status_for_batch(batch, today)
        if retail_status is None or not retail_status.sale_allowed:
            raise ValueError(f"Batch {batch.batch_id} is expired and cannot be ordered")
        if quantity <= 0:
            raise ValueError(f"Order quantity must be positive: {quantity}")

        available = self.inventory.get_available_quantity(batch.batch_id, batch.quantity)
        if quantity > available:
            raise ValueError(
                f"Only {available:g} {product_unit(batch.crop_type)} available in stock "
                f"for batch {batch.batch_id}"
            )

        order = Order(
            order_id=generate_order_id(),
            retailer_id=retailer_id,
            batch_id=batch.batch_id,
            quantity=quantity,
            order_date=order_date or datetime.now(),
            status=OrderStatus.PENDING,
        )
        self._orders[order.order_id] = order
        logger.info(f"Order {order.order_id}: {quantity:g} from {batch.batch_id} for {retailer_id}")
        return order

    def update_order_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        """
        Change the status of an order.

        Returns:
            The updated order, or None if no order has this id
        """
        order = self._orders.get(order_id)
        if order is None:
            logger.warning(f"Cannot update unknown order {order_id}")
            return None

        updated = order.model_copy(update={'status': OrderStatus(status)})
        self._orders[order_id] = updated
        logger.info(f"Order {order_id}: {order.status.value} -> {updated.status.value}")
        return updated

    def get_order(self, order_id: str) -> Optional[Order]:
        return self._orders.get(order_id)

    def get_all_orders(self) -> List[Order]:
        return list(self._orders.values())

    def pending_orders(self) -> List[Order]:
        return [o for o in self._orders.values() if o.status == OrderStatus.PENDING]

    def create_crate(
        self,
        batch: BatchWithDetails,
        quantity: float,
        created_at: Optional[datetime] = None
    ) -> Crate:
        """Pack a crate from a batch."""
        if quantity <= 0:
            raise ValueError(f"Crate quantity must be positive: {quantity}")

        crate = Crate(
            crate_id=generate_crate_id(),
            batch_id=batch.batch_id,
            quantity=quantity,
            created_at=created_at or datetime.now(),
        )
        self._crates[crate.crate_id] = crate
        logger.info(f"Crate {crate.crate_id}: {quantity:g} from {batch.batch_id}")
        return crate

    def get_crate(self, crate_id: str) -> Optional[Crate]:
        return self._crates.get(crate_id)

    def get_all_crates(self) -> List[Crate]:
        return list(self._crates.values())
