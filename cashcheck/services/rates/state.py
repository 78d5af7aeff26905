from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence

from cashcheck.models.constants import Currency
from cashcheck.models.rates import FetchState, FetchStatus
from cashcheck.services.declaration import apply_rate_texts
from .base import RateFetchError, RateProvider
from .fetcher import fetch_rates

logger = logging.getLogger("cashcheck.rates")

"""Process-wide rate table and fetch status.

Design:
    - One table shared by manual entry and remote fetches; a successful fetch
      replaces it wholesale, a failed fetch leaves it untouched.
    - Every refresh() takes a new generation number. A run that finishes after
      a newer one has started is discarded, so a slow stale response cannot
      overwrite fresher rates.
    - refresh() is the catch boundary for RateFetchError: failures become a
      status message and never propagate to the caller.
    - Auto mode only records a flag; switching it on triggers one refresh().
"""


@dataclass(frozen=True)
class RateStateView:
    rates: Dict[Currency, float]
    status: FetchStatus
    auto: bool


class RateState:
    def __init__(
        self,
        provider: RateProvider,
        currencies: Sequence[Currency] = tuple(Currency),
        auto: bool = False,
    ):
        self._provider = provider
        self._currencies = tuple(currencies)
        self._rates: Dict[Currency, float] = {}
        self._status = FetchStatus()
        self._generation = 0
        self._auto = auto

    @property
    def auto(self) -> bool:
        return self._auto

    def rates(self) -> Dict[Currency, float]:
        return dict(self._rates)

    def status(self) -> FetchStatus:
        return self._status.model_copy()

    def snapshot(self) -> RateStateView:
        return RateStateView(rates=self.rates(), status=self.status(), auto=self._auto)

    async def refresh(self) -> FetchStatus:
        self._generation += 1
        generation = self._generation
        self._status = self._status.model_copy(
            update={"state": FetchState.IN_PROGRESS, "generation": generation}
        )
        logger.info("rate fetch started", extra={"generation": generation})
        try:
            result = await fetch_rates(self._currencies, self._provider)
        except RateFetchError as e:
            if generation != self._generation:
                logger.info("stale rate fetch failure ignored", extra={"generation": generation})
                return self.status()
            logger.warning("rate fetch failed: %s", e.message, extra={"generation": generation})
            self._status = self._status.model_copy(
                update={"state": FetchState.ERROR, "message": e.message}
            )
            return self.status()

        if generation != self._generation:
            logger.info("stale rate fetch discarded", extra={"generation": generation})
            return self.status()
        self._rates = {c: float(r) for c, r in result.rates.items()}
        self._status = FetchStatus(
            state=FetchState.OK,
            message=None,
            last_fetched_at=result.fetched_at,
            generation=generation,
        )
        logger.info("rate fetch succeeded", extra={"generation": generation})
        return self.status()

    def set_manual_rates(self, rate_texts: Mapping[Currency, Optional[str]]) -> Dict[Currency, float]:
        """Apply manually typed rates; invalid or empty text clears that currency."""
        self._rates = apply_rate_texts(self._rates, rate_texts)
        return self.rates()

    async def set_auto(self, enabled: bool) -> bool:
        """Record the auto flag; returns True when the switch triggered a refresh."""
        turned_on = enabled and not self._auto
        self._auto = enabled
        if turned_on:
            await self.refresh()
        return turned_on
