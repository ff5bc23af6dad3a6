"""Rounding / display helpers.

Centralized so the HTML board and the JSON API format rates identically.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP

from ratecard.models.constants import FIXED_SPREAD_BASE


def display_decimals(base_currency: str) -> int:
    return 2 if base_currency == FIXED_SPREAD_BASE else 4


def format_rate(value: float, decimals: int) -> str:
    step = Decimal(1).scaleb(-decimals)
    return str(Decimal(str(value)).quantize(step, rounding=ROUND_HALF_UP))
