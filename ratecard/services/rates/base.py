from __future__ import annotations

"""Rate source abstraction.

A source returns a whole RateTable for one base currency and one calendar day;
selection between sources lives in providers.RateSourceSelector.
"""
from abc import ABC, abstractmethod
from datetime import date

from ratecard.models.rates import RateTable


class RateSource(ABC):
    name: str = "abstract"

    @abstractmethod
    async def fetch_rates(self, base_currency: str, on: date) -> RateTable:
        """Return mid rates (units of each currency per 1 base) valid for `on`.

        Raises RateFetchError when the upstream cannot be reached or parsed.
        """
        raise NotImplementedError


