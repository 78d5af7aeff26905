from __future__ import annotations

from typing import Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from cashcheck.models.constants import Currency
from cashcheck.models.rates import FetchStatus
from cashcheck.services.rates.state import RateState
from .deps import get_rate_state, rates_as_text, require_manual_rates_enabled

"""Rates router.

Endpoints:
    - GET /rates          -> current table, fetch status, auto flag
    - POST /rates/refresh -> one fetch attempt now; failure is reported in status
    - PUT /rates/manual   -> typed rates (guarded by settings.enable_manual_rates)
    - PUT /rates/auto     -> toggle auto mode; switching on triggers a fetch

In-memory only; a process restart starts from an empty table.
"""

router = APIRouter(prefix="/rates", tags=["rates"])


class RatesOut(BaseModel):
    rates: Dict[Currency, float]
    status: FetchStatus
    auto: bool


class ManualRatesPayload(BaseModel):
    rates: Dict[Currency, Optional[str]] = Field(
        ..., description="Home-currency units per 1 unit; empty or invalid text clears the rate"
    )

    @field_validator("rates", mode="before")
    @classmethod
    def _rates_as_text(cls, v):
        return rates_as_text(v)


class AutoPayload(BaseModel):
    enabled: bool


def _rates_out(state: RateState) -> RatesOut:
    view = state.snapshot()
    return RatesOut(rates=view.rates, status=view.status, auto=view.auto)


@router.get("", response_model=RatesOut, summary="Current rate table and fetch status")
async def get_rates(state: RateState = Depends(get_rate_state)):
    return _rates_out(state)


@router.post("/refresh", response_model=RatesOut, summary="Fetch rates now")
async def refresh_rates(state: RateState = Depends(get_rate_state)):
    await state.refresh()
    return _rates_out(state)


@router.put("/manual", response_model=RatesOut, summary="Set rates manually")
async def set_manual_rates(
    payload: ManualRatesPayload,
    _: bool = Depends(require_manual_rates_enabled),
    state: RateState = Depends(get_rate_state),
):
    state.set_manual_rates(payload.rates)
    return _rates_out(state)


@router.put("/auto", response_model=RatesOut, summary="Toggle automatic rates")
async def set_auto(payload: AutoPayload, state: RateState = Depends(get_rate_state)):
    await state.set_auto(payload.enabled)
    return _rates_out(state)
