from .base import RateFetchError, RateProvider
from .fetcher import fetch_rates
from .providers import ExternalHTTPRateProvider, StaticRateProvider, make_rate_provider
from .state import RateState

__all__ = [
    "RateFetchError",
    "RateProvider",
    "fetch_rates",
    "ExternalHTTPRateProvider",
    "StaticRateProvider",
    "make_rate_provider",
    "RateState",
]
