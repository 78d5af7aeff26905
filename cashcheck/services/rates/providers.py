from __future__ import annotations

"""Concrete rate providers and factory.

'external-http' asks exchangerate.host for `base=<CUR>&symbols=<HOME>` and reads
`rates.<HOME>` from the payload. 'static' returns fixed placeholders so the
service can run without network access.
"""
from typing import Any, Dict, Optional, Type

import httpx

from cashcheck.core.config import Settings
from cashcheck.models.constants import Currency, DEFAULT_HOME_CURRENCY
from cashcheck.services.declaration import usable_rate
from cashcheck.services.http_client import get_json, make_async_client
from .base import RateProvider

# IDR per 1 unit, rough 2025 levels
_STATIC_RATES: Dict[Currency, float] = {
    Currency.SGD: 12600.0,
    Currency.AED: 4450.0,
    Currency.EUR: 18900.0,
}


def extract_rate(payload: Any, home_currency: str) -> Optional[float]:
    """Pull a positive numeric rate out of a lookup payload, else None."""
    if not isinstance(payload, dict):
        return None
    rates = payload.get("rates")
    if not isinstance(rates, dict):
        return None
    return usable_rate(rates.get(home_currency))


class StaticRateProvider(RateProvider):
    """Fixed IDR figures; only valid when the home currency is IDR."""

    home_currency = DEFAULT_HOME_CURRENCY

    async def get_rate(self, currency: Currency) -> Optional[float]:  # type: ignore[override]
        return _STATIC_RATES.get(Currency(currency))


class ExternalHTTPRateProvider(RateProvider):
    def __init__(
        self,
        base_url: str,
        home_currency: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.home_currency = home_currency
        self._timeout = timeout
        self._transport = transport

    async def get_rate(self, currency: Currency) -> Optional[float]:  # type: ignore[override]
        params = {"base": Currency(currency).value, "symbols": self.home_currency}
        async with make_async_client(self._timeout, self._transport) as client:
            payload = await get_json(client, self.base_url, params=params)
        return extract_rate(payload, self.home_currency)


_PROVIDER_REGISTRY: Dict[str, Type[RateProvider]] = {
    "static": StaticRateProvider,
    "external-http": ExternalHTTPRateProvider,
}


def make_rate_provider(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> RateProvider:
    kind = settings.exchange_rate_provider
    cls = _PROVIDER_REGISTRY.get(kind)
    if not cls:
        raise ValueError(f"Unknown rate provider kind '{kind}'")
    if cls is ExternalHTTPRateProvider:
        return ExternalHTTPRateProvider(
            base_url=str(settings.exchange_api_base_url),
            home_currency=settings.home_currency,
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )
    return cls()
