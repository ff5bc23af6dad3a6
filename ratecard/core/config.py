from functools import lru_cache

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

from ratecard import __version__
from ratecard.models.constants import CURRENCIES, DEFAULT_BASE_CURRENCY

RATE_SOURCE_KINDS = {"http", "static"}


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    RATE_SOURCE, LATEST_RATES_URL, HTTP_TIMEOUT_SECONDS).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "FX Rate Board"
    debug: bool = False
    version: str = __version__

    # Board defaults
    default_base_currency: str = DEFAULT_BASE_CURRENCY

    # Upstream rate services
    # Allowed: 'http' (live + historical services), 'static' (built-in reference rates)
    rate_source: str = "http"
    latest_rates_url: AnyHttpUrl = "https://api.exchangerate-api.com/v4/latest"  # base currency appended as path
    historical_rates_url: AnyHttpUrl = "https://api.frankfurter.app"  # date appended as path, base as ?from=
    http_timeout_seconds: float = 5.0

    def init_post_load(self) -> None:
        """Normalize and validate derived fields."""
        self.default_base_currency = self.default_base_currency.upper()
        if self.default_base_currency not in CURRENCIES:
            raise ValueError(
                f"Unsupported default_base_currency '{self.default_base_currency}'. Allowed: {CURRENCIES}"
            )
        if self.rate_source not in RATE_SOURCE_KINDS:
            raise ValueError(
                f"Unsupported rate_source '{self.rate_source}'. Allowed: {RATE_SOURCE_KINDS}"
            )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
