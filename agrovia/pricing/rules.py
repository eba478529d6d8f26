"""
Pricing rules for graded produce.

Unit price = base price of the product x grade multiplier, rounded to the
nearest whole rupee. Products missing from the price table use the default
base price.
"""

from ..constants import BASE_PRICE_PER_UNIT, DEFAULT_BASE_PRICE, GRADE_MULTIPLIER
from ..models import QualityGrade
from ..utils.conversions import round_half_up


def get_base_price(product_id: str) -> int:
    """Base price per unit, DEFAULT_BASE_PRICE for unknown products."""
    return BASE_PRICE_PER_UNIT.get(product_id, DEFAULT_BASE_PRICE)


def get_grade_multiplier(grade: QualityGrade) -> float:
    """Price multiplier for a grade (A 1.2, B 1.0, C 0.7)."""
    return GRADE_MULTIPLIER[QualityGrade(grade).value]


def get_product_price(product_id: str, grade: QualityGrade) -> int:
    """
    Unit price for a product at a given grade.

    Args:
        product_id: Product id (unknown ids use the default base price)
        grade: Quality grade

    Returns:
        Rounded unit price

    Example:
        >>> get_product_price("tomato", QualityGrade.A)
        48
    """
    return round_half_up(get_base_price(product_id) * get_grade_multiplier(grade))


def calculate_line_amount(product_id: str, grade: QualityGrade, quantity: float) -> float:
    """Amount for selling a quantity of a product at a grade."""
    return quantity * get_product_price(product_id, grade)
