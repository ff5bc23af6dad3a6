from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import CURRENCIES


class RateTable(BaseModel):
    """Mid rates for one base currency as of one moment.

    rates[code] is the amount of `code` per 1 unit of base_currency.
    """

    model_config = ConfigDict(frozen=True)

    base_currency: str
    as_of: datetime
    source: str
    rates: Dict[str, float] = Field(default_factory=dict)

    @field_validator("base_currency")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        if v not in CURRENCIES:
            raise ValueError("unsupported currency")
        return v

    @field_validator("rates")
    @classmethod
    def positive_rates(cls, v: Dict[str, float]) -> Dict[str, float]:
        if any(rate <= 0 for rate in v.values()):
            raise ValueError("rates must be positive")
        return v

    def mid(self, currency: str) -> Optional[float]:
        return self.rates.get(currency)


class Quote(BaseModel):
    """Derived mid / bid / ask for one currency pair. Never stored."""

    model_config = ConfigDict(frozen=True)

    currency: str
    mid: float
    bid: float
    ask: float


@dataclass(frozen=True)
class SpreadSpec:
    fixed_offset: float  # absolute units of the fixed-spread base currency
    percent_offset: float  # fraction, 0.01 == 1%


@dataclass(frozen=True)
class QuoteCard:
    """One grid card: a quote plus its display strings."""

    quote: Quote
    decimals: int
    mid_display: str
    bid_display: str
    ask_display: str

    @property
    def currency(self) -> str:
        return self.quote.currency


@dataclass(frozen=True)
class FetchSuccess:
    table: RateTable


@dataclass(frozen=True)
class FetchFailure:
    message: str


FetchOutcome = Union[FetchSuccess, FetchFailure]


class QuoteOut(BaseModel):
    currency: str
    mid: float
    bid: float
    ask: float
    mid_display: str
    bid_display: str
    ask_display: str

    @classmethod
    def from_card(cls, card: QuoteCard) -> "QuoteOut":
        return cls(
            currency=card.currency,
            mid=card.quote.mid,
            bid=card.quote.bid,
            ask=card.quote.ask,
            mid_display=card.mid_display,
            bid_display=card.bid_display,
            ask_display=card.ask_display,
        )


class QuoteBoardOut(BaseModel):
    base_currency: str
    requested_date: date
    as_of: datetime
    source: str
    decimals: int
    quotes: list[QuoteOut]
