from functools import lru_cache
from typing import Optional
from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict
from cashcheck.models.constants import DEFAULT_HOME_CURRENCY


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG, HOME_CURRENCY, EXCHANGE_RATE_PROVIDER, AUTO_RATES).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Cash Declaration Checker"
    debug: bool = False
    version: str = "0.1.0"

    # Currency the traveler's cash is stated in
    home_currency: str = DEFAULT_HOME_CURRENCY

    # Exchange rates
    exchange_api_base_url: AnyHttpUrl = "https://api.exchangerate.host/latest"  # ?base=<CUR>&symbols=<HOME> appended per lookup
    http_timeout_seconds: Optional[float] = None  # None keeps the httpx default

    # Allowed: 'external-http' (exchangerate.host), 'static' (built-in fixed placeholders)
    exchange_rate_provider: str = "external-http"

    # Fetch rates on startup and whenever auto mode is switched on
    auto_rates: bool = True
    enable_manual_rates: bool = True

    def init_post_load(self) -> None:
        """Normalize and validate derived fields."""
        self.home_currency = self.home_currency.strip().upper()
        allowed = {"static", "external-http"}
        if self.exchange_rate_provider not in allowed:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{self.exchange_rate_provider}'. Allowed: {allowed}"
            )
        if self.exchange_rate_provider == "static" and self.home_currency != DEFAULT_HOME_CURRENCY:
            raise ValueError(
                f"The static provider only knows {DEFAULT_HOME_CURRENCY} rates, not {self.home_currency}"
            )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
