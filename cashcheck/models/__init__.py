"""Pydantic domain models for the Cash Declaration Checker."""

from .constants import Currency, JurisdictionCode, DEFAULT_HOME_CURRENCY  # re-export
from .jurisdiction import Jurisdiction, JURISDICTIONS
from .evaluation import EvaluationInput, EvaluationResult
from .rates import FetchState, FetchStatus, RateSnapshot

__all__ = [
    "Currency",
    "JurisdictionCode",
    "DEFAULT_HOME_CURRENCY",
    "Jurisdiction",
    "JURISDICTIONS",
    "EvaluationInput",
    "EvaluationResult",
    "FetchState",
    "FetchStatus",
    "RateSnapshot",
]
