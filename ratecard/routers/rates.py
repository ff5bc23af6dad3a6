from __future__ import annotations

from datetime import date as date_type
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Path, Query

from ratecard.models.constants import CURRENCIES
from ratecard.models.rates import QuoteBoardOut, QuoteOut
from ratecard.services.money import display_decimals
from ratecard.services.quotes import (
    DEFAULT_FIXED_OFFSET,
    DEFAULT_PERCENT_OFFSET,
    build_quote_grid,
    spread_table,
)
from ratecard.services.rates.providers import RateSourceSelector
from .deps import get_selector

"""Rates router: stateless JSON view of the derived quotes.

Endpoints:
    - GET /rates/spreads          -> spread table and defaults
    - GET /rates/{base}?date=...  -> mid / bid / ask for every other listed currency

Unsupported base or a future date answer 400, upstream failures 502 (see
core.errors handlers).
"""

router = APIRouter(prefix="/rates", tags=["rates"])


@router.get("/spreads", summary="Spread table used to derive bid / ask")
async def get_spreads() -> Dict[str, object]:
    return {
        "spreads": spread_table(),
        "default_fixed_offset": DEFAULT_FIXED_OFFSET,
        "default_percent_offset": DEFAULT_PERCENT_OFFSET,
    }


@router.get(
    "/{base}",
    response_model=QuoteBoardOut,
    summary="Mid / bid / ask quotes per 1 unit of base currency",
)
async def get_quotes(
    base: str = Path(..., description="Base currency code", examples=list(CURRENCIES)),
    on: Optional[date_type] = Query(
        None, alias="date", description="Calendar day (YYYY-MM-DD); defaults to today"
    ),
    selector: RateSourceSelector = Depends(get_selector),
):
    day = on or selector.today()
    table = await selector.fetch_rates(base, day)
    cards = build_quote_grid(table)
    return QuoteBoardOut(
        base_currency=table.base_currency,
        requested_date=day,
        as_of=table.as_of,
        source=table.source,
        decimals=display_decimals(table.base_currency),
        quotes=[QuoteOut.from_card(c) for c in cards],
    )
