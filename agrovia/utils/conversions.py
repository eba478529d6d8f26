"""Small conversion helpers shared by the rule modules."""

import math
from datetime import date as Date, datetime
from typing import Optional, Union


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3).

    Python's built-in round() uses banker's rounding, which would turn a
    2.5 day shelf life into 2.

    Example:
        >>> round_half_up(1.2)
        1
        >>> round_half_up(2.5)
        3
    """
    return int(math.floor(value + 0.5))


def to_date(value: Union[Date, datetime]) -> Date:
    """Truncate a datetime to its calendar day; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def today_or(value: Optional[Union[Date, datetime]]) -> Date:
    """Return value truncated to a date, or the current local date if None."""
    if value is None:
        return Date.today()
    return to_date(value)
