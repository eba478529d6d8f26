"""Retail data models: orders, crates, bills and sold inventory."""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .product import QualityGrade


class OrderStatus(str, Enum):
    """Lifecycle of a retailer order."""
    PENDING = "Pending"
    FULFILLED = "Fulfilled"
    CANCELLED = "Cancelled"


class Order(BaseModel):
    """
    A retailer order placed against a graded batch.

    Attributes:
        order_id: Order identifier ("ORD-...")
        retailer_id: Ordering retailer
        batch_id: Batch the order draws from
        quantity: Ordered quantity
        order_date: Time the order was placed
        status: Pending, Fulfilled or Cancelled
    """
    model_config = ConfigDict(frozen=True)

    order_id: str = Field(..., description="Order identifier")
    retailer_id: str = Field(..., description="Retailer ID")
    batch_id: str = Field(..., description="Batch ID")
    quantity: float = Field(..., description="Ordered quantity", gt=0)
    order_date: datetime = Field(default_factory=datetime.now, description="Order time")
    status: OrderStatus = Field(default=OrderStatus.PENDING, description="Order status")


class Crate(BaseModel):
    """A warehouse crate packed from a single batch."""
    model_config = ConfigDict(frozen=True)

    crate_id: str = Field(..., description="Crate identifier")
    batch_id: str = Field(..., description="Batch ID")
    quantity: float = Field(..., description="Packed quantity", gt=0)
    created_at: datetime = Field(default_factory=datetime.now, description="Packing time")


class BillItem(BaseModel):
    """
    One line of a customer bill.

    Attributes:
        batch_id: Batch sold
        crate_id: Crate the goods came from, if any
        quantity: Sold quantity
        grade: Grade of the batch at sale time
        price_per_kg: Unit price for the product and grade
        amount: quantity * price_per_kg
        product_name: Display name printed on the bill
    """
    model_config = ConfigDict(frozen=True)

    batch_id: str = Field(..., description="Batch ID")
    crate_id: Optional[str] = Field(None, description="Crate ID")
    quantity: float = Field(..., description="Sold quantity", gt=0)
    grade: QualityGrade = Field(..., description="Batch grade")
    price_per_kg: int = Field(..., description="Unit price", ge=0)
    amount: float = Field(..., description="Line amount", ge=0)
    product_name: Optional[str] = Field(None, description="Product display name")


class Bill(BaseModel):
    """
    A finalised customer bill.

    Attributes:
        bill_id: Bill identifier ("BILL-...")
        retailer_id: Issuing retailer
        items: Bill lines
        total_amount: Sum of line amounts
        created_at: Time the bill was issued
        unique_code: Code customers use to look the bill up
    """
    model_config = ConfigDict(frozen=True)

    bill_id: str = Field(..., description="Bill identifier")
    retailer_id: str = Field(..., description="Retailer ID")
    items: List[BillItem] = Field(default_factory=list, description="Bill lines")
    total_amount: float = Field(..., description="Bill total", ge=0)
    created_at: datetime = Field(default_factory=datetime.now, description="Issue time")
    unique_code: str = Field(..., description="Customer lookup code")

    @model_validator(mode='after')
    def validate_total(self):
        """Total must equal the sum of the line amounts."""
        line_total = sum(item.amount for item in self.items)
        if abs(line_total - self.total_amount) > 1e-6:
            raise ValueError(
                f"total_amount ({self.total_amount}) does not match line amounts ({line_total})"
            )
        return self


class InventoryRecord(BaseModel):
    """Quantity sold so far from a batch."""
    model_config = ConfigDict(frozen=True)

    batch_id: str = Field(..., description="Batch ID")
    sold_quantity: float = Field(default=0.0, description="Sold quantity", ge=0)
