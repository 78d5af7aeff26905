from __future__ import annotations

"""Cash declaration evaluator.

Converts a home-currency cash amount into each jurisdiction's currency and
compares it against that jurisdiction's fixed declaration threshold.

Rules:
    - Amount text is free-form; every non-digit is stripped before parsing
      ("25.000.000", "Rp 25,000,000" -> 25000000).
    - A missing/zero amount or a missing/non-positive rate yields None
      ("undetermined") for that jurisdiction. Nothing here raises.
    - The threshold is non-strict: an amount equal to it must be declared.
    - No rounding happens before the comparison.
"""
import math
import re
from typing import Dict, Iterable, Mapping, Optional

from cashcheck.models.constants import Currency, JurisdictionCode
from cashcheck.models.evaluation import EvaluationInput, EvaluationResult
from cashcheck.models.jurisdiction import Jurisdiction, JURISDICTIONS

_NON_DIGITS = re.compile(r"[^0-9]")

STATUS_UNDETERMINED = "undetermined"
STATUS_DECLARE = "declare"
STATUS_NO_DECLARATION = "no_declaration"


def parse_amount(text: Optional[str]) -> Optional[float]:
    """Digits only; an absurdly long amount becomes inf and still compares."""
    digits = _NON_DIGITS.sub("", text or "")
    if not digits:
        return None
    amount = float(digits)
    return amount or None


def parse_rate(text: Optional[str]) -> Optional[float]:
    """Return a usable rate from manual input, or None when unknown."""
    if text is None:
        return None
    try:
        rate = float(str(text).strip())
    except ValueError:
        return None
    if not math.isfinite(rate) or rate <= 0:
        return None
    return rate


def usable_rate(rate: object) -> Optional[float]:
    """Positive finite number as float, else None. bool is never a rate."""
    if isinstance(rate, bool) or not isinstance(rate, (int, float)):
        return None
    try:
        value = float(rate)
    except OverflowError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def evaluate_one(
    amount: Optional[float], rate: Optional[float], threshold: float
) -> Optional[EvaluationResult]:
    rate = usable_rate(rate)
    if not amount or rate is None:
        return None
    equivalent = threshold * rate
    if not math.isfinite(equivalent):
        # rate so large the threshold has no home-currency value
        return None
    converted = amount / rate
    return EvaluationResult(
        converted_amount=converted,
        meets_or_exceeds_threshold=converted >= threshold,
        equivalent_home_currency_threshold=max(0, math.floor(equivalent)),
    )


def evaluate(
    amount_text: Optional[str],
    rate_table: Mapping[Currency, float],
    jurisdictions: Iterable[Jurisdiction] = JURISDICTIONS.values(),
) -> Dict[JurisdictionCode, Optional[EvaluationResult]]:
    amount = parse_amount(amount_text)
    return {
        j.code: evaluate_one(amount, rate_table.get(j.currency), j.threshold_amount)
        for j in jurisdictions
    }


def apply_rate_texts(
    table: Mapping[Currency, float], rate_texts: Mapping[Currency, Optional[str]]
) -> Dict[Currency, float]:
    """Return a copy of table with typed rates applied.

    Invalid or empty text makes that currency unknown rather than keeping the
    previous value.
    """
    merged: Dict[Currency, float] = dict(table)
    for currency, text in rate_texts.items():
        rate = parse_rate(text)
        if rate is None:
            merged.pop(Currency(currency), None)
        else:
            merged[Currency(currency)] = rate
    return merged


def evaluate_input(
    data: EvaluationInput,
) -> Dict[JurisdictionCode, Optional[EvaluationResult]]:
    return evaluate(data.amount_text, apply_rate_texts({}, data.rate_texts))


def declaration_status(result: Optional[EvaluationResult]) -> str:
    if result is None:
        return STATUS_UNDETERMINED
    return STATUS_DECLARE if result.meets_or_exceeds_threshold else STATUS_NO_DECLARATION
