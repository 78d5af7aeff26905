from __future__ import annotations

import math
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer
from .constants import Currency


class EvaluationInput(BaseModel):
    """Raw strings from the input boundary: cash amount plus manual rates.

    Nothing is parsed here; the evaluator does its own sanitization.
    """

    model_config = ConfigDict(frozen=True)

    amount_text: str = ""
    rate_texts: Dict[Currency, str] = Field(default_factory=dict)


class EvaluationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    converted_amount: float
    meets_or_exceeds_threshold: bool
    equivalent_home_currency_threshold: int = Field(..., ge=0)

    @field_serializer("converted_amount", when_used="json")
    def _finite_or_null(self, value: float) -> Optional[float]:
        # JSON has no inf; an amount too large to convert is reported as null
        return finite_or_none(value)


def finite_or_none(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value):
        return None
    return value
