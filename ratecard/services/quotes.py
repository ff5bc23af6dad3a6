"""Quote derivation: TTM / TTB / TTS from a single mid rate.

When the base is JPY the spread is a flat amount in yen per unit of the quote
currency; for every other base it is a percentage of mid.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from ratecard.models.constants import CURRENCIES, FIXED_SPREAD_BASE
from ratecard.models.rates import Quote, QuoteCard, RateTable, SpreadSpec
from .money import display_decimals, format_rate

DEFAULT_FIXED_OFFSET = 1.0
DEFAULT_PERCENT_OFFSET = 0.01

SPREADS: Dict[str, SpreadSpec] = {
    "USD": SpreadSpec(fixed_offset=1.0, percent_offset=0.01),
    "EUR": SpreadSpec(fixed_offset=1.5, percent_offset=0.015),
    "GBP": SpreadSpec(fixed_offset=2.0, percent_offset=0.015),
    "AUD": SpreadSpec(fixed_offset=1.5, percent_offset=0.015),
    "CAD": SpreadSpec(fixed_offset=1.5, percent_offset=0.015),
    "CHF": SpreadSpec(fixed_offset=2.0, percent_offset=0.015),
    "CNY": SpreadSpec(fixed_offset=0.5, percent_offset=0.02),
    "KRW": SpreadSpec(fixed_offset=0.03, percent_offset=0.02),
    "INR": SpreadSpec(fixed_offset=0.5, percent_offset=0.02),
}


def fixed_offset(currency: str) -> float:
    spec = SPREADS.get(currency)
    return spec.fixed_offset if spec else DEFAULT_FIXED_OFFSET


def percent_offset(currency: str) -> float:
    spec = SPREADS.get(currency)
    return spec.percent_offset if spec else DEFAULT_PERCENT_OFFSET


def derive_quote(mid: float, quote_currency: str, base_currency: str) -> Quote:
    """Return mid / bid / ask for `quote_currency` priced per 1 `base_currency`.

    bid is what the bank pays when buying the foreign currency (customer sells),
    ask what it charges when selling it (customer buys).
    """
    if base_currency == FIXED_SPREAD_BASE:
        offset = fixed_offset(quote_currency)
        return Quote(currency=quote_currency, mid=mid, bid=mid - offset, ask=mid + offset)
    pct = percent_offset(quote_currency)
    return Quote(
        currency=quote_currency,
        mid=mid,
        bid=mid * (1 - pct),
        ask=mid * (1 + pct),
    )


def make_card(quote: Quote, decimals: int) -> QuoteCard:
    return QuoteCard(
        quote=quote,
        decimals=decimals,
        mid_display=format_rate(quote.mid, decimals),
        bid_display=format_rate(quote.bid, decimals),
        ask_display=format_rate(quote.ask, decimals),
    )


def build_quote_grid(
    table: RateTable, currencies: Iterable[str] = CURRENCIES
) -> List[QuoteCard]:
    """Cards in display order, skipping the base and currencies without a usable mid."""
    base = table.base_currency
    decimals = display_decimals(base)
    cards: List[QuoteCard] = []
    for currency in currencies:
        if currency == base:
            continue
        mid = table.mid(currency)
        if not mid or mid <= 0:
            continue
        cards.append(make_card(derive_quote(mid, currency, base), decimals))
    return cards


def spread_table() -> Dict[str, Dict[str, float]]:
    return {
        c: {"fixed_offset": s.fixed_offset, "percent_offset": s.percent_offset}
        for c, s in SPREADS.items()
    }
