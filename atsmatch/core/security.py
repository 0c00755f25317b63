from __future__ import annotations

import hmac

from fastapi import Header, HTTPException, status

from atsmatch.core.config import settings

AUTH_ERROR_MESSAGE = "Please provide a valid API key to use the scoring API."


def check_api_key(x_api_key: str | None) -> None:
    if not settings.api_key:
        return
    if not x_api_key or not hmac.compare_digest(x_api_key, settings.api_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=AUTH_ERROR_MESSAGE,
        )


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    check_api_key(x_api_key)
