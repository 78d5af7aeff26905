"""Money / rounding helpers.

Centralized so the rate fetcher and any future display code use identical
rounding semantics (half up, never banker's rounding).
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP


def round_whole(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
