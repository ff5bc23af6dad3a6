import json
import sys
from datetime import date, timedelta

from fastapi.testclient import TestClient
from ratecard.main import create_app
from ratecard.core.config import Settings

"""Smoke run of the rate board.

Fetches JPY quotes for today and USD quotes for yesterday through the JSON API,
then renders the HTML board once. Pass --static to use the built-in reference
rates instead of the live upstream services.
"""


def run(source: str):
    settings = Settings(rate_source=source)
    settings.init_post_load()
    client = TestClient(create_app(settings_override=settings))
    yesterday = (date.today() - timedelta(days=1)).isoformat()
    today_jpy = client.get("/rates/JPY")
    past_usd = client.get("/rates/USD", params={"date": yesterday})
    board = client.get("/")
    print(
        json.dumps(
            {
                "jpy_today": today_jpy.json(),
                "usd_yesterday": past_usd.json(),
                "board_status": board.status_code,
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    run("static" if "--static" in sys.argv else "http")
