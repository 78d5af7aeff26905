from fastapi import HTTPException, Request

from cashcheck.core.config import Settings
from cashcheck.services.rates.state import RateState


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rate_state(request: Request) -> RateState:
    return request.app.state.rate_state


def require_manual_rates_enabled(request: Request) -> bool:
    if not get_app_settings(request).enable_manual_rates:
        raise HTTPException(status_code=403, detail="manual rate entry disabled")
    return True


def rates_as_text(value):
    """Accept JSON numbers for rate fields by turning them into text."""
    if not isinstance(value, dict):
        return value
    return {
        k: str(v) if isinstance(v, (int, float)) and not isinstance(v, bool) else v
        for k, v in value.items()
    }
