"""Data models for the produce supply chain tracker."""

from .product import (
    QualityGrade,
    StorageType,
    FreshnessStatus,
    Firmness,
    ProductCategory,
    Product,
    PRODUCTS,
    get_product_by_id,
    product_display_name,
    product_unit,
)
from .farmer import Farmer
from .batch import (
    Batch,
    QualityTest,
    StorageRecord,
    RetailStatus,
    QRMapping,
    BatchWithDetails,
)
from .retail import (
    OrderStatus,
    Order,
    Crate,
    BillItem,
    Bill,
    InventoryRecord,
)

__all__ = [
    # Enumerations
    "QualityGrade",
    "StorageType",
    "FreshnessStatus",
    "Firmness",
    "ProductCategory",
    # Catalog
    "Product",
    "PRODUCTS",
    "get_product_by_id",
    "product_display_name",
    "product_unit",
    # Batch tracking
    "Farmer",
    "Batch",
    "QualityTest",
    "StorageRecord",
    "RetailStatus",
    "QRMapping",
    "BatchWithDetails",
    # Retail
    "OrderStatus",
    "Order",
    "Crate",
    "BillItem",
    "Bill",
    "InventoryRecord",
]
