from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from cashcheck.core.config import Settings
from cashcheck.models.constants import Currency, JurisdictionCode
from cashcheck.models.evaluation import EvaluationResult, finite_or_none
from cashcheck.models.jurisdiction import Jurisdiction, JURISDICTIONS
from cashcheck.services.declaration import (
    apply_rate_texts,
    declaration_status,
    evaluate,
    parse_amount,
)
from cashcheck.services.rates.state import RateState
from .deps import get_app_settings, get_rate_state, rates_as_text

router = APIRouter(tags=["checker"])


class CheckPayload(BaseModel):
    amount: str = Field("", description="Cash amount in home currency, free-form text")
    rates: Dict[Currency, Optional[str]] = Field(
        default_factory=dict,
        description="Optional manual rates (home units per 1 unit); omitted currencies use the current rate table",
    )

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_as_text(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("rates", mode="before")
    @classmethod
    def _rates_as_text(cls, v):
        return rates_as_text(v)


class JurisdictionCheckOut(BaseModel):
    code: JurisdictionCode
    label: str
    currency: Currency
    threshold_amount: float
    rate: Optional[float] = None
    status: str
    result: Optional[EvaluationResult] = None


class CheckOut(BaseModel):
    home_currency: str
    amount: Optional[float] = Field(None, description="Parsed amount; null when missing or too large to represent")
    jurisdictions: List[JurisdictionCheckOut]


@router.get("/jurisdictions", response_model=List[Jurisdiction], summary="List jurisdictions")
async def list_jurisdictions():
    return list(JURISDICTIONS.values())


@router.post("/check", response_model=CheckOut, summary="Check declaration duty per jurisdiction")
async def check(
    payload: CheckPayload,
    state: RateState = Depends(get_rate_state),
    settings: Settings = Depends(get_app_settings),
):
    table = apply_rate_texts(state.rates(), payload.rates)
    results = evaluate(payload.amount, table, JURISDICTIONS.values())
    items = [
        JurisdictionCheckOut(
            code=j.code,
            label=j.label,
            currency=j.currency,
            threshold_amount=j.threshold_amount,
            rate=table.get(j.currency),
            status=declaration_status(results[j.code]),
            result=results[j.code],
        )
        for j in JURISDICTIONS.values()
    ]
    return CheckOut(
        home_currency=settings.home_currency,
        amount=finite_or_none(parse_amount(payload.amount)),
        jurisdictions=items,
    )
