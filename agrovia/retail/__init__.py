"""Retail workflows: sold inventory, orders, crates and bills."""

from .inventory import InventoryLedger
from .orders import OrderBook
from .billing import BillBuilder, BillRegistry

__all__ = [
    'InventoryLedger',
    'OrderBook',
    'BillBuilder',
    'BillRegistry',
]
