"""Product catalog and the enumerations shared by all produce records."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class QualityGrade(str, Enum):
    """Quality tier assigned after inspection (A best, C lowest)."""
    A = "A"
    B = "B"
    C = "C"

    def __str__(self) -> str:
        return self.value


class StorageType(str, Enum):
    """Storage condition affecting shelf life."""
    NORMAL = "Normal"
    COLD = "Cold"

    def __str__(self) -> str:
        return self.value


class FreshnessStatus(str, Enum):
    """Derived three-state classification of remaining shelf life."""
    FRESH = "Fresh"
    CONSUME_SOON = "Consume Soon"
    EXPIRED = "Expired"

    def __str__(self) -> str:
        return self.value


class Firmness(str, Enum):
    """Firmness category recorded during quality inspection."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    def __str__(self) -> str:
        return self.value


class ProductCategory(str, Enum):
    """Catalog grouping of produce."""
    VEGETABLE = "Vegetable"
    FRUIT = "Fruit"
    LEAFY_GREEN = "Leafy Green"
    ROOT_VEGETABLE = "Root Vegetable"


class Product(BaseModel):
    """
    Represents a produce type that farmers can deliver.

    Shelf life modifiers and base prices are kept in the rule tables of
    agrovia.constants, keyed by the product id, so products outside this
    catalog still get neutral defaults.

    Attributes:
        id: Product identifier used as the batch crop type (e.g. "tomato")
        name: Display name
        category: Catalog category
        unit: Selling unit ("kg", "dozen", "piece")
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Product identifier")
    name: str = Field(..., description="Display name")
    category: ProductCategory = Field(..., description="Catalog category")
    unit: str = Field(default="kg", description="Selling unit")

    def __str__(self) -> str:
        """String representation."""
        return f"{self.name} ({self.unit})"


PRODUCTS: List[Product] = [
    Product(id="tomato", name="Tomato", category=ProductCategory.VEGETABLE),
    Product(id="potato", name="Potato", category=ProductCategory.ROOT_VEGETABLE),
    Product(id="onion", name="Onion", category=ProductCategory.VEGETABLE),
    Product(id="carrot", name="Carrot", category=ProductCategory.ROOT_VEGETABLE),
    Product(id="cabbage", name="Cabbage", category=ProductCategory.LEAFY_GREEN),
    Product(id="spinach", name="Spinach", category=ProductCategory.LEAFY_GREEN),
    Product(id="broccoli", name="Broccoli", category=ProductCategory.VEGETABLE),
    Product(id="cauliflower", name="Cauliflower", category=ProductCategory.VEGETABLE),
    Product(id="capsicum", name="Capsicum", category=ProductCategory.VEGETABLE),
    Product(id="cucumber", name="Cucumber", category=ProductCategory.VEGETABLE),
    Product(id="eggplant", name="Eggplant", category=ProductCategory.VEGETABLE),
    Product(id="lettuce", name="Lettuce", category=ProductCategory.LEAFY_GREEN),
    Product(id="apple", name="Apple", category=ProductCategory.FRUIT),
    Product(id="banana", name="Banana", category=ProductCategory.FRUIT, unit="dozen"),
    Product(id="orange", name="Orange", category=ProductCategory.FRUIT),
    Product(id="mango", name="Mango", category=ProductCategory.FRUIT),
    Product(id="grapes", name="Grapes", category=ProductCategory.FRUIT),
    Product(id="watermelon", name="Watermelon", category=ProductCategory.FRUIT, unit="piece"),
    Product(id="strawberry", name="Strawberry", category=ProductCategory.FRUIT),
    Product(id="pineapple", name="Pineapple", category=ProductCategory.FRUIT, unit="piece"),
]


def get_product_by_id(product_id: str) -> Optional[Product]:
    """Look up a catalog product, returning None for unknown ids."""
    for product in PRODUCTS:
        if product.id == product_id:
            return product
    return None


def product_display_name(product_id: str) -> str:
    """Catalog name for a product id, or the id itself when not in the catalog."""
    product = get_product_by_id(product_id)
    return product.name if product else product_id


def product_unit(product_id: str) -> str:
    """Selling unit for a product id ("kg" when not in the catalog)."""
    product = get_product_by_id(product_id)
    return product.unit if product else "kg"
