"""Identifier generation for batches, labels, orders, crates and bills.

Ids combine a prefix, the current time in milliseconds encoded in base 36
and a short random suffix, e.g. "BTH-LX3K9Q2A-7F2C".
"""

import random
import string
import time
from typing import Optional

from .constants import BILL_CODE_LENGTH

_BASE36_ALPHABET = string.digits + string.ascii_uppercase
_CODE_ALPHABET = string.ascii_uppercase + string.digits


def to_base36(value: int) -> str:
    """Encode a non-negative integer in upper-case base 36."""
    if value < 0:
        raise ValueError(f"Cannot encode negative value: {value}")
    if value == 0:
        return "0"

    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def _random_suffix(length: int) -> str:
    return "".join(random.choices(_BASE36_ALPHABET, k=length))


def _prefixed_id(prefix: str, suffix_length: int, timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{prefix}-{to_base36(timestamp_ms)}-{_random_suffix(suffix_length)}"


def generate_batch_id(timestamp_ms: Optional[int] = None) -> str:
    """Batch id, e.g. "BTH-LX3K9Q2A-7F2C"."""
    return _prefixed_id("BTH", 4, timestamp_ms)


def generate_qr_id(timestamp_ms: Optional[int] = None) -> str:
    """QR label id, e.g. "QR-LX3K9Q2A-7F2C1B"."""
    return _prefixed_id("QR", 6, timestamp_ms)


def generate_order_id(timestamp_ms: Optional[int] = None) -> str:
    return _prefixed_id("ORD", 4, timestamp_ms)


def generate_crate_id(timestamp_ms: Optional[int] = None) -> str:
    return _prefixed_id("CRT", 4, timestamp_ms)


def generate_bill_id(timestamp_ms: Optional[int] = None) -> str:
    return _prefixed_id("BILL", 4, timestamp_ms)


def generate_unique_code(length: int = BILL_CODE_LENGTH) -> str:
    """Customer-facing bill lookup code of upper-case letters and digits."""
    return "".join(random.choices(_CODE_ALPHABET, k=length))
