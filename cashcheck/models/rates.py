from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, Optional
from pydantic import BaseModel, Field
from .constants import Currency


class FetchState(str, Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    ERROR = "error"
    OK = "ok"


class RateSnapshot(BaseModel):
    """Outcome of one complete fetch run (every currency present)."""

    rates: Dict[Currency, int]
    fetched_at: datetime


class FetchStatus(BaseModel):
    state: FetchState = FetchState.IDLE
    message: Optional[str] = None
    last_fetched_at: Optional[datetime] = None
    generation: int = Field(0, ge=0)
