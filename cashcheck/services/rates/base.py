from __future__ import annotations

"""Rate provider abstraction.

A provider answers one question per call: how many home-currency units equal
one unit of the given currency. It returns None when the source has no usable
value and raises on transport failures; aggregation lives in fetcher.py.
"""
from abc import ABC, abstractmethod
from typing import Optional

from cashcheck.models.constants import Currency, DEFAULT_HOME_CURRENCY

GENERIC_FETCH_ERROR = "Could not load rates."


class RateFetchError(Exception):
    """A fetch run failed as a whole; no rate from it may be applied."""

    def __init__(self, message: str | None = None):
        super().__init__(message or GENERIC_FETCH_ERROR)

    @property
    def message(self) -> str:
        return str(self.args[0])


class RateProvider(ABC):
    home_currency: str = DEFAULT_HOME_CURRENCY

    @abstractmethod
    async def get_rate(self, currency: Currency) -> Optional[float]:
        """Return home-currency units per 1 unit of currency, or None if absent."""
        raise NotImplementedError
