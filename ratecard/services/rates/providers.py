from __future__ import annotations

"""Concrete rate sources and the today / historical selector.

'LatestRateSource' reads live rates from an exchangerate-api style service,
'HistoricalRateSource' reads a past day from a frankfurter style service and
'StaticRateSource' serves fixed reference rates for offline development.
"""
import logging
import math
from datetime import date, datetime, time, timezone
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import httpx

from ratecard.core.config import Settings
from ratecard.core.errors import (
    FETCH_FAILED_MESSAGE,
    FutureDateError,
    RateFetchError,
    UnsupportedCurrencyError,
)
from ratecard.models.constants import CURRENCIES
from ratecard.models.rates import RateTable
from ratecard.services.http_client import HttpError, get_json
from .base import RateSource

logger = logging.getLogger("ratecard.rates")

# USD per-unit reference values; cross rates are derived for any base
_STATIC_USD_RATES: Dict[str, float] = {
    "USD": 1.0,
    "JPY": 150.0,
    "EUR": 0.92,
    "GBP": 0.79,
    "AUD": 1.52,
    "CAD": 1.36,
    "CHF": 0.88,
    "CNY": 7.25,
    "KRW": 1350.0,
    "INR": 83.0,
}


def _check_base(base_currency: str) -> str:
    base = base_currency.upper()
    if base not in CURRENCIES:
        raise UnsupportedCurrencyError(f"unsupported currency '{base_currency}'")
    return base


def _parse_rates(data: Mapping[str, Any]) -> Dict[str, float]:
    raw = data.get("rates")
    if not isinstance(raw, dict):
        raise RateFetchError(f"{FETCH_FAILED_MESSAGE}: response has no rates")
    rates: Dict[str, float] = {}
    for code, value in raw.items():
        # bool is an int subclass; it is never a rate. NaN / Infinity are dropped too
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        try:
            rate = float(value)
        except OverflowError:  # integer literal too large for a float
            continue
        if rate > 0 and math.isfinite(rate):
            rates[str(code).upper()] = rate
    return rates


class _HTTPRateSource(RateSource):
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = str(base_url).rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def request_for(self, base_currency: str, on: date) -> Tuple[str, Dict[str, str]]:
        raise NotImplementedError

    def as_of(self, data: Mapping[str, Any], on: date) -> datetime:
        raise NotImplementedError

    async def fetch_rates(self, base_currency: str, on: date) -> RateTable:
        base = _check_base(base_currency)
        url, params = self.request_for(base, on)
        try:
            data = await get_json(
                url, params=params or None, timeout=self._timeout, transport=self._transport
            )
        except HttpError as e:
            logger.warning("rate fetch failed: %s", e, extra={"source": self.name})
            raise RateFetchError() from e
        return RateTable(
            base_currency=base,
            as_of=self.as_of(data, on),
            source=self.name,
            rates=_parse_rates(data),
        )


class LatestRateSource(_HTTPRateSource):
    """GET {base_url}/{BASE} -> {"rates": {...}, "time_last_updated": epoch_seconds}"""

    name = "exchangerate-api"

    def request_for(self, base_currency: str, on: date) -> Tuple[str, Dict[str, str]]:
        return f"{self._base_url}/{base_currency}", {}

    def as_of(self, data: Mapping[str, Any], on: date) -> datetime:
        stamp = data.get("time_last_updated")
        if isinstance(stamp, (int, float)) and not isinstance(stamp, bool):
            return datetime.fromtimestamp(stamp, tz=timezone.utc)
        return datetime.now(timezone.utc)


class HistoricalRateSource(_HTTPRateSource):
    """GET {base_url}/{YYYY-MM-DD}?from={BASE} -> {"rates": {...}, "date": "YYYY-MM-DD"}"""

    name = "frankfurter"

    def request_for(self, base_currency: str, on: date) -> Tuple[str, Dict[str, str]]:
        return f"{self._base_url}/{on.isoformat()}", {"from": base_currency}

    def as_of(self, data: Mapping[str, Any], on: date) -> datetime:
        # Upstream answers with the nearest business day on or before `on`
        raw = data.get("date")
        try:
            day = date.fromisoformat(raw) if isinstance(raw, str) else on
        except ValueError:
            day = on
        return datetime.combine(day, time.min, tzinfo=timezone.utc)


class StaticRateSource(RateSource):
    name = "static"

    async def fetch_rates(self, base_currency: str, on: date) -> RateTable:
        base = _check_base(base_currency)
        per_usd = _STATIC_USD_RATES[base]
        rates = {c: v / per_usd for c, v in _STATIC_USD_RATES.items()}
        return RateTable(
            base_currency=base,
            as_of=datetime.combine(on, time.min, tzinfo=timezone.utc),
            source=self.name,
            rates=rates,
        )


class RateSourceSelector:
    """Routes a (base, day) request to the latest or the historical source.

    today is injected so the cut-over can be pinned in tests.
    """

    def __init__(
        self,
        latest: RateSource,
        historical: RateSource,
        today: Callable[[], date] = date.today,
    ):
        self.latest = latest
        self.historical = historical
        self._today = today

    def today(self) -> date:
        return self._today()

    def source_for(self, on: date) -> RateSource:
        today = self.today()
        if on > today:
            raise FutureDateError(f"date {on.isoformat()} is in the future")
        return self.latest if on == today else self.historical

    async def fetch_rates(self, base_currency: str, on: date) -> RateTable:
        source = self.source_for(on)
        logger.debug(
            "fetching rates",
            extra={"base_currency": base_currency, "selected_date": on, "source": source.name},
        )
        return await source.fetch_rates(base_currency, on)


def _make_http_sources(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport]
) -> Tuple[RateSource, RateSource]:
    timeout = settings.http_timeout_seconds
    return (
        LatestRateSource(settings.latest_rates_url, timeout=timeout, transport=transport),
        HistoricalRateSource(settings.historical_rates_url, timeout=timeout, transport=transport),
    )


def _make_static_sources(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport]
) -> Tuple[RateSource, RateSource]:
    source = StaticRateSource()
    return source, source


_SOURCE_REGISTRY = {
    "http": _make_http_sources,
    "static": _make_static_sources,
}


def make_rate_selector(
    settings: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    today: Callable[[], date] = date.today,
) -> RateSourceSelector:
    factory = _SOURCE_REGISTRY.get(settings.rate_source)
    if not factory:
        raise ValueError(f"Unknown rate source kind '{settings.rate_source}'")
    latest, historical = factory(settings, transport)
    return RateSourceSelector(latest, historical, today=today)
