"""Board controller: the state behind the rate board page.

State lives in one BoardState owned by one BoardController. Fetch results are
stored as a FetchSuccess / FetchFailure outcome, never as separate nullable
fields. Each fetch is tagged with a sequence number and only the most recently
issued fetch may write its outcome back; older responses that resolve late are
dropped.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from ratecard.core.errors import RateFetchError, UnsupportedCurrencyError
from ratecard.models.constants import CURRENCIES, DEFAULT_BASE_CURRENCY
from ratecard.models.rates import (
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    QuoteCard,
    RateTable,
)
from .quotes import build_quote_grid
from .rates.providers import RateSourceSelector

logger = logging.getLogger("ratecard.board")


@dataclass
class BoardState:
    base_currency: str
    selected_date: date
    outcome: Optional[FetchOutcome] = None
    loading: bool = False

    @property
    def rates(self) -> Optional[RateTable]:
        if isinstance(self.outcome, FetchSuccess):
            return self.outcome.table
        return None

    @property
    def error(self) -> Optional[str]:
        if isinstance(self.outcome, FetchFailure):
            return self.outcome.message
        return None

    @property
    def last_updated(self) -> Optional[datetime]:
        table = self.rates
        return table.as_of if table else None


class BoardController:
    def __init__(
        self,
        selector: RateSourceSelector,
        *,
        base_currency: str = DEFAULT_BASE_CURRENCY,
    ):
        self._selector = selector
        self._seq = itertools.count(1)
        self._latest_seq = 0
        self.state = BoardState(
            base_currency=self._validate_base(base_currency),
            selected_date=selector.today(),
        )

    @staticmethod
    def _validate_base(code: str) -> str:
        code = code.upper()
        if code not in CURRENCIES:
            raise UnsupportedCurrencyError(f"unsupported currency '{code}'")
        return code

    def today(self) -> date:
        return self._selector.today()

    @property
    def has_loaded(self) -> bool:
        return self.state.outcome is not None or self.state.loading

    async def refresh(self) -> FetchOutcome:
        """Fetch rates for the current base / date and store the outcome.

        Returns the outcome of this fetch even when a newer fetch superseded it
        and it was therefore not stored.
        """
        seq = next(self._seq)
        self._latest_seq = seq
        base = self.state.base_currency
        day = self.state.selected_date
        self.state.loading = True
        extra = {"seq": seq, "base_currency": base, "selected_date": day}
        logger.info("fetch start", extra=extra)

        outcome: FetchOutcome
        try:
            table = await self._selector.fetch_rates(base, day)
        except RateFetchError as e:
            outcome = FetchFailure(message=e.message)
            logger.warning("fetch failed: %s", e.message, extra=extra)
        except Exception:
            if seq == self._latest_seq:
                self.state.loading = False
            raise
        else:
            outcome = FetchSuccess(table=table)
            logger.info("fetch ok (%d rates)", len(table.rates), extra=extra)

        if seq != self._latest_seq:
            logger.info("discarding superseded fetch", extra=extra)
            return outcome
        self.state.outcome = outcome
        self.state.loading = False
        return outcome

    async def select_base(self, code: str) -> None:
        code = self._validate_base(code)
        if code == self.state.base_currency and self.state.outcome is not None:
            return
        self.state.base_currency = code
        await self.refresh()

    async def select_date(self, day: date) -> bool:
        """Switch to `day` and refetch. Future days are refused; state is left alone."""
        if day > self.today():
            logger.info("rejected future date", extra={"selected_date": day})
            return False
        self.state.selected_date = day
        await self.refresh()
        return True

    def quote_cards(self) -> List[QuoteCard]:
        table = self.state.rates
        if table is None:
            return []
        return build_quote_grid(table)
