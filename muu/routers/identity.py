"""
Anonymous identity — the X-User-ID header.

The identity layer in front of this service signs visitors in anonymously and
forwards their uid as a UUID. The service trusts the header; it only checks
the format.
"""

from __future__ import annotations

import uuid
from typing import Optional

from fastapi import Header, HTTPException, status


def _parse_user_id(raw: str) -> uuid.UUID:
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid user ID format — must be a UUID",
            headers={"X-Error-Code": "MISSING_USER_ID"},
        )


async def optional_user_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-ID"),
) -> Optional[uuid.UUID]:
    """Return the caller's uid, or None when the header is absent."""
    if x_user_id is None:
        return None
    return _parse_user_id(x_user_id)


async def require_user_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-ID"),
) -> uuid.UUID:
    """Return the caller's uid; 400 when the header is absent or malformed."""
    if x_user_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing X-User-ID header",
            headers={"X-Error-Code": "MISSING_USER_ID"},
        )
    return _parse_user_id(x_user_id)
