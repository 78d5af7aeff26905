from __future__ import annotations

from typing import Dict
from pydantic import BaseModel, ConfigDict, Field
from .constants import Currency, JurisdictionCode


class Jurisdiction(BaseModel):
    """Border with a fixed cash declaration threshold in its own currency."""

    model_config = ConfigDict(frozen=True)

    code: JurisdictionCode
    label: str
    currency: Currency
    threshold_amount: float = Field(..., gt=0)


JURISDICTIONS: Dict[JurisdictionCode, Jurisdiction] = {
    JurisdictionCode.SG: Jurisdiction(
        code=JurisdictionCode.SG,
        label="Singapore",
        currency=Currency.SGD,
        threshold_amount=20000,
    ),
    JurisdictionCode.AE: Jurisdiction(
        code=JurisdictionCode.AE,
        label="UAE (Abu Dhabi)",
        currency=Currency.AED,
        threshold_amount=60000,
    ),
    JurisdictionCode.EU: Jurisdiction(
        code=JurisdictionCode.EU,
        label="EU/Austria",
        currency=Currency.EUR,
        threshold_amount=10000,
    ),
}
