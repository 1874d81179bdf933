"""
Authentication dependencies — shared admin bearer token.
"""

import logging
import secrets
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Missing credentials are reported as 401 below rather than FastAPI's 403
security = HTTPBearer(auto_error=False)


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Compare the bearer token against ADMIN_TOKEN.

    An empty ADMIN_TOKEN rejects every request.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    expected = settings.admin_token
    if not expected or not secrets.compare_digest(credentials.credentials, expected):
        logger.warning("Rejected request with invalid admin token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - invalid admin token",
            headers={"WWW-Authenticate": "Bearer"},
        )
