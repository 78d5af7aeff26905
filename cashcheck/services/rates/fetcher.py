from __future__ import annotations

"""All-or-nothing concurrent rate fetch.

One lookup per currency runs concurrently; every lookup is awaited before any
outcome is decided. A transport failure in any lookup fails the run with that
failure's message. Otherwise a single absent rate fails the run with
"incomplete rates"; zero, negative, non-finite and boolean values count as
absent. Only a complete set is rounded and returned.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from cashcheck.models.constants import Currency
from cashcheck.models.rates import RateSnapshot
from cashcheck.services.declaration import usable_rate
from cashcheck.services.money import round_whole
from .base import RateFetchError, RateProvider

logger = logging.getLogger("cashcheck.rates")

INCOMPLETE_RATES = "incomplete rates"


async def fetch_rates(
    currencies: Iterable[Currency], provider: RateProvider
) -> RateSnapshot:
    symbols: List[Currency] = list(dict.fromkeys(Currency(c) for c in currencies))
    results = await asyncio.gather(
        *(provider.get_rate(c) for c in symbols), return_exceptions=True
    )

    found: Dict[Currency, float] = {}
    failure: Optional[BaseException] = None
    for currency, result in zip(symbols, results):
        if isinstance(result, BaseException):
            logger.warning(
                "rate lookup failed: %s", result, extra={"currency": currency.value}
            )
            if failure is None:
                failure = result
        elif usable_rate(result) is None:
            logger.warning("rate absent or invalid: %r", result, extra={"currency": currency.value})
        else:
            found[currency] = usable_rate(result)

    if failure is not None:
        if not isinstance(failure, Exception):
            # CancelledError and friends are not lookup failures
            raise failure
        raise RateFetchError(str(failure)) from failure
    if len(found) != len(symbols):
        raise RateFetchError(INCOMPLETE_RATES)

    return RateSnapshot(
        rates={c: round_whole(r) for c, r in found.items()},
        fetched_at=datetime.now(timezone.utc),
    )
