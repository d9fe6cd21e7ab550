"""Rate limiters shared by the API routers."""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from src.core.config import get_settings


def get_caller_key(request: Request) -> str:
    """Rate limit key: caller id header when present, client address otherwise."""
    caller_id = request.headers.get(get_settings().CALLER_ID_HEADER)
    if caller_id and caller_id.strip():
        return f"caller:{caller_id.strip()}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=get_remote_address,
    enabled=get_settings().RATE_LIMIT_ENABLED,
)

limiter_authenticated = Limiter(
    key_func=get_caller_key,
    enabled=get_settings().RATE_LIMIT_ENABLED,
)


def general_limit() -> str:
    """Current limit for unauthenticated endpoints (read per request)."""
    return get_settings().RATE_LIMIT_GENERAL


def authenticated_limit() -> str:
    """Current per-caller limit for authenticated endpoints (read per request)."""
    return get_settings().RATE_LIMIT_AUTHENTICATED
