"""Security utilities for API authentication."""

from typing import Annotated

from fastapi import Header, HTTPException, status

from smartkharcha.core.config import settings


async def verify_api_key(x_api_key: Annotated[str, Header(alias="X-API-Key")]) -> str:
    """Verify admin API key from header."""
    if x_api_key != settings.api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )
    return x_api_key
