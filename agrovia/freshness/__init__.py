"""
Freshness calculation engine for harvested produce.

This module computes shelf life and expiry dates from grade, storage type
and product, classifies remaining shelf life, and grades inspections.
"""

from .calculator import (
    get_base_shelf_life,
    get_shelf_life_modifier,
    calculate_shelf_life,
    calculate_expiry_date,
    calculate_remaining_days,
    determine_freshness_status,
    is_sale_allowed,
    calculate_days_since_harvest,
    build_retail_status,
    retail_status_for_batch,
)
from .grading import firmness_score, determine_grade_from_inspection

__all__ = [
    'get_base_shelf_life',
    'get_shelf_life_modifier',
    'calculate_shelf_life',
    'calculate_expiry_date',
    'calculate_remaining_days',
    'determine_freshness_status',
    'is_sale_allowed',
    'calculate_days_since_harvest',
    'build_retail_status',
    'retail_status_for_batch',
    'firmness_score',
    'determine_grade_from_inspection',
]
