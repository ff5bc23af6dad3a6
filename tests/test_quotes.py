"""Tests for quote derivation and the card grid."""

from datetime import datetime, timezone

import pytest

from ratecard.models.constants import CURRENCIES
from ratecard.models.rates import RateTable
from ratecard.services.money import display_decimals, format_rate
from ratecard.services.quotes import (
    DEFAULT_FIXED_OFFSET,
    DEFAULT_PERCENT_OFFSET,
    SPREADS,
    build_quote_grid,
    derive_quote,
    fixed_offset,
    percent_offset,
)

AS_OF = datetime(2024, 5, 10, tzinfo=timezone.utc)


class TestDeriveQuote:

    def test_jpy_base_uses_flat_yen_offset(self):
        q = derive_quote(150.0, "USD", "JPY")
        assert (q.mid, q.bid, q.ask) == (150.0, 149.0, 151.0)

    @pytest.mark.parametrize("currency", sorted(SPREADS))
    def test_jpy_base_offsets_from_table(self, currency):
        mid = 100.0
        q = derive_quote(mid, currency, "JPY")
        assert q.bid == pytest.approx(mid - SPREADS[currency].fixed_offset)
        assert q.ask == pytest.approx(mid + SPREADS[currency].fixed_offset)

    @pytest.mark.parametrize("currency", sorted(SPREADS))
    def test_other_base_percent_from_table(self, currency):
        mid = 1.25
        q = derive_quote(mid, currency, "GBP")
        pct = SPREADS[currency].percent_offset
        assert q.bid == pytest.approx(mid * (1 - pct))
        assert q.ask == pytest.approx(mid * (1 + pct))

    def test_one_percent_spread_for_non_jpy_base(self):
        q = derive_quote(1.10, "USD", "EUR")
        assert q.bid == pytest.approx(1.089)
        assert q.ask == pytest.approx(1.111)
        assert format_rate(q.bid, 4) == "1.0890"
        assert format_rate(q.ask, 4) == "1.1110"

    def test_eur_carries_its_own_spread(self):
        q = derive_quote(1.10, "EUR", "USD")
        assert q.bid == pytest.approx(1.0835)
        assert q.ask == pytest.approx(1.1165)

    def test_unlisted_currency_falls_back_to_defaults(self):
        assert "JPY" not in SPREADS
        assert fixed_offset("JPY") == DEFAULT_FIXED_OFFSET
        assert percent_offset("JPY") == DEFAULT_PERCENT_OFFSET
        q = derive_quote(150.0, "JPY", "USD")
        assert q.bid == pytest.approx(148.5)
        assert q.ask == pytest.approx(151.5)

    @pytest.mark.parametrize("base", CURRENCIES)
    @pytest.mark.parametrize("mid", [0.0, 0.0064, 1.0, 8.77, 1350.0])
    def test_bid_never_above_mid_never_above_ask(self, base, mid):
        for currency in CURRENCIES:
            q = derive_quote(mid, currency, base)
            assert q.bid <= q.mid <= q.ask

    def test_pure(self):
        assert derive_quote(0.0064, "KRW", "JPY") == derive_quote(0.0064, "KRW", "JPY")


class TestDisplay:

    def test_decimals_by_base(self):
        assert display_decimals("JPY") == 2
        assert display_decimals("USD") == 4

    def test_format_rounds_half_up(self):
        assert format_rate(149.005, 2) == "149.01"
        assert format_rate(150, 2) == "150.00"
        assert format_rate(0.00005, 4) == "0.0001"


class TestQuoteGrid:

    def _table(self, base, rates):
        return RateTable(base_currency=base, as_of=AS_OF, source="test", rates=rates)

    def test_excludes_base_and_keeps_display_order(self):
        table = self._table("USD", {"USD": 1.0, "INR": 83.0, "JPY": 150.0, "EUR": 0.92})
        cards = build_quote_grid(table)
        assert [c.currency for c in cards] == ["JPY", "EUR", "INR"]

    def test_skips_currencies_missing_from_table(self):
        table = self._table("USD", {"JPY": 150.0})
        cards = build_quote_grid(table)
        assert [c.currency for c in cards] == ["JPY"]

    def test_jpy_base_two_decimals(self):
        table = self._table("JPY", {"USD": 150.0})
        (card,) = build_quote_grid(table)
        assert card.decimals == 2
        assert (card.mid_display, card.bid_display, card.ask_display) == (
            "150.00",
            "149.00",
            "151.00",
        )

    def test_other_base_four_decimals(self):
        table = self._table("EUR", {"USD": 1.10})
        (card,) = build_quote_grid(table)
        assert card.decimals == 4
        assert (card.mid_display, card.bid_display, card.ask_display) == (
            "1.1000",
            "1.0890",
            "1.1110",
        )

    def test_rate_table_rejects_non_positive_rates(self):
        with pytest.raises(ValueError):
            self._table("USD", {"JPY": 0.0})
