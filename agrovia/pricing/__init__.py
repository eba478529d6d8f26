"""Grade-based pricing of produce."""

from .rules import (
    get_base_price,
    get_grade_multiplier,
    get_product_price,
    calculate_line_amount,
)

__all__ = [
    'get_base_price',
    'get_grade_multiplier',
    'get_product_price',
    'calculate_line_amount',
]
