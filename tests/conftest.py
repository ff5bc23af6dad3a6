"""Shared fixtures: a pinned clock and a fake pair of upstream rate services."""

from datetime import date

import httpx
import pytest

from ratecard.core.config import Settings

TODAY = date(2024, 5, 10)

LATEST_URL = "https://latest.test/v4/latest"
HISTORICAL_URL = "https://historical.test"

JPY_LATEST = {
    "base": "JPY",
    "time_last_updated": 1715299200,  # 2024-05-10T00:00:00Z
    "rates": {
        "JPY": 1,
        "USD": 0.0064,
        "EUR": 0.0059,
        "GBP": 0.0051,
        "AUD": 0.0097,
        "CAD": 0.0088,
        "CHF": 0.0058,
        "CNY": 0.046,
        "KRW": 8.77,
        "INR": 0.534,
    },
}

USD_LATEST = {
    "base": "USD",
    "time_last_updated": 1715299200,
    "rates": {"USD": 1, "JPY": 150.0, "EUR": 1.10, "GBP": 0.79, "KRW": 1350},
}

USD_HISTORICAL = {
    "amount": 1.0,
    "base": "USD",
    "date": "2024-05-09",
    "rates": {"JPY": 155.5, "EUR": 0.93},
}


class FakeUpstream:
    """Records requests and answers like the two upstream services.

    `fail_with` forces every response to that status code.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None
        self.latest = {"JPY": JPY_LATEST, "USD": USD_LATEST}
        self.historical = {"USD": USD_HISTORICAL}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"error": "boom"})
        url = str(request.url)
        if url.startswith(LATEST_URL):
            base = request.url.path.rsplit("/", 1)[-1]
            payload = self.latest.get(base)
        else:
            base = request.url.params.get("from")
            payload = self.historical.get(base)
        if payload is None:
            return httpx.Response(404, json={"message": "not found"})
        return httpx.Response(200, json=payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
    s = Settings(
        rate_source="http",
        latest_rates_url=LATEST_URL,
        historical_rates_url=HISTORICAL_URL,
        debug=False,
    )
    s.init_post_load()
    return s


@pytest.fixture
def today():
    return lambda: TODAY
