"""Shared fixtures: fake rate providers and an isolated API client."""
import asyncio
from typing import Dict, Optional, Union

import pytest
from fastapi.testclient import TestClient

from cashcheck.core.config import Settings
from cashcheck.main import create_app
from cashcheck.models.constants import Currency
from cashcheck.services.rates.base import RateProvider

LookupOutcome = Union[float, int, None, Exception]


class FakeRateProvider(RateProvider):
    """Answers lookups from a dict; Exception values are raised.

    If `gate` is set, lookups wait on it first. The values and gate in effect
    when a lookup starts are the ones it uses.
    """

    def __init__(self, values: Dict[Currency, LookupOutcome]):
        self.values = dict(values)
        self.gate: Optional[asyncio.Event] = None
        self.calls = []

    async def get_rate(self, currency: Currency):  # type: ignore[override]
        values, gate = self.values, self.gate
        self.calls.append(currency)
        if gate is not None:
            await gate.wait()
        outcome = values.get(currency)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


GOOD_RATES = {
    Currency.SGD: 12000.4,
    Currency.AED: 4200.5,
    Currency.EUR: 17000.0,
}


@pytest.fixture
def settings() -> Settings:
    s = Settings(auto_rates=False, exchange_rate_provider="static", debug=False)
    s.init_post_load()
    return s


@pytest.fixture
def provider() -> FakeRateProvider:
    return FakeRateProvider(GOOD_RATES)


@pytest.fixture
def client(settings, provider) -> TestClient:
    app = create_app(settings_override=settings, provider_override=provider)
    return TestClient(app)
