"""Centralized business constants for freshness, grading and pricing.

This module contains the rule tables used across the library: base shelf
life per grade and storage type, product shelf life modifiers, base prices
and grade multipliers. Centralizing these values keeps the freshness
calculator, pricing rule and analytics consistent.
"""

# ============================================================================
# SHELF LIFE CONSTANTS (days)
# ============================================================================

#: Base shelf life by quality grade, applies to all produce
#: Keys are grade letters, values map storage type to days
SHELF_LIFE_RULES = {
    "A": {"Normal": 7, "Cold": 12},
    "B": {"Normal": 5, "Cold": 9},
    "C": {"Normal": 3, "Cold": 6},
}

#: Product-specific multipliers applied to the base shelf life
PRODUCT_SHELF_LIFE_MODIFIER = {
    "tomato": 1.0,
    "potato": 3.0,
    "onion": 2.5,
    "carrot": 2.0,
    "cabbage": 1.5,
    "spinach": 0.5,
    "broccoli": 0.8,
    "cauliflower": 1.0,
    "capsicum": 1.0,
    "cucumber": 0.8,
    "eggplant": 1.0,
    "lettuce": 0.4,
    "apple": 2.0,
    "banana": 0.6,
    "orange": 2.0,
    "mango": 0.8,
    "grapes": 0.7,
    "watermelon": 1.2,
    "strawberry": 0.4,
    "pineapple": 1.0,
}

#: Modifier used for products missing from PRODUCT_SHELF_LIFE_MODIFIER
DEFAULT_SHELF_LIFE_MODIFIER = 1.0

#: Grade assumed for the provisional expiry computed at intake
#: Replaced by the inspected grade once the batch is quality tested
PROVISIONAL_INTAKE_GRADE = "B"


# ============================================================================
# FRESHNESS CLASSIFICATION
# ============================================================================

#: Batches with more remaining days than this are Fresh
CONSUME_SOON_THRESHOLD_DAYS = 3

#: Remaining days at or below which a Consume Soon alert is urgent
URGENT_ALERT_THRESHOLD_DAYS = 1


# ============================================================================
# INSPECTION GRADING
# ============================================================================

#: Points contributed by each firmness category
FIRMNESS_SCORES = {
    "High": 2,
    "Medium": 1,
    "Low": 0,
}

#: Minimum visual + firmness total for grade A
GRADE_A_MIN_SCORE = 6

#: Minimum visual + firmness total for grade B (below is grade C)
GRADE_B_MIN_SCORE = 4

#: Visual quality score range (inclusive)
MIN_VISUAL_QUALITY = 1
MAX_VISUAL_QUALITY = 5


# ============================================================================
# PRICING CONSTANTS (Rs. per unit)
# ============================================================================

#: Base price per unit by product
BASE_PRICE_PER_UNIT = {
    "tomato": 40,
    "potato": 30,
    "onion": 35,
    "carrot": 45,
    "cabbage": 25,
    "spinach": 60,
    "broccoli": 80,
    "cauliflower": 50,
    "capsicum": 70,
    "cucumber": 35,
    "eggplant": 45,
    "lettuce": 55,
    "apple": 120,
    "banana": 50,
    "orange": 80,
    "mango": 150,
    "grapes": 100,
    "watermelon": 40,
    "strawberry": 200,
    "pineapple": 60,
}

#: Base price used for products missing from BASE_PRICE_PER_UNIT
DEFAULT_BASE_PRICE = 50

#: Price multiplier by quality grade
GRADE_MULTIPLIER = {
    "A": 1.2,
    "B": 1.0,
    "C": 0.7,
}


# ============================================================================
# RETAIL AND ANALYTICS CONSTANTS
# ============================================================================

#: Retailer used when an order does not name one
DEFAULT_RETAILER_ID = "RET-001"

#: Length of the customer-facing bill lookup code
BILL_CODE_LENGTH = 8

#: Share of Consume Soon stock assumed saved by early warnings
WASTE_PREVENTION_RATE = 0.3

#: Average batch weight (kg) used for dashboard waste estimates
AVERAGE_BATCH_QUANTITY_KG = 25

#: Quality score weights per grade for farmer performance
QUALITY_SCORE_WEIGHTS = {
    "A": 100,
    "B": 70,
    "C": 40,
}

#: Longest window (days) shown in the daily report trend
MAX_TREND_DAYS = 14
