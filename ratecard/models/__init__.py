"""Pydantic domain models for the FX rate board."""

from .constants import CURRENCIES, DEFAULT_BASE_CURRENCY, FIXED_SPREAD_BASE  # re-export
from .rates import (
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    Quote,
    QuoteBoardOut,
    QuoteCard,
    QuoteOut,
    RateTable,
    SpreadSpec,
)

__all__ = [
    "CURRENCIES",
    "DEFAULT_BASE_CURRENCY",
    "FIXED_SPREAD_BASE",
    "FetchFailure",
    "FetchOutcome",
    "FetchSuccess",
    "Quote",
    "QuoteBoardOut",
    "QuoteCard",
    "QuoteOut",
    "RateTable",
    "SpreadSpec",
]
