import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader

from src.core.config import get_settings

logger = logging.getLogger(__name__)

# Authentication happens upstream; the gateway forwards the verified caller id.
caller_id_scheme = APIKeyHeader(
    name=get_settings().CALLER_ID_HEADER,
    auto_error=False,
    description="Identity of the authenticated caller, set by the API gateway",
)


async def get_current_caller_id(
    request: Request,
    caller_id: Annotated[str | None, Depends(caller_id_scheme)],
) -> str:
    """Dependency returning the already-authenticated caller's opaque id."""
    if caller_id is None or not caller_id.strip():
        logger.warning("Missing caller identity: path=%s", request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing caller identity",
        )

    caller_id = caller_id.strip()

    # Store caller_id in request state for middleware logging and rate limiting
    request.state.caller_id = caller_id

    return caller_id
