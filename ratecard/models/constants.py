"""Domain constants for the rate board.

CURRENCIES is ordered: it is the display order of the selector and the card grid.
"""

from typing import Tuple

CURRENCIES: Tuple[str, ...] = (
    "USD",
    "JPY",
    "EUR",
    "GBP",
    "AUD",
    "CAD",
    "CHF",
    "CNY",
    "KRW",
    "INR",
)
DEFAULT_BASE_CURRENCY = "JPY"

# Base currency whose spreads are quoted as flat amounts instead of percentages
FIXED_SPREAD_BASE = "JPY"
