"""
Authentication dependencies for FastAPI
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import uuid
import structlog

from weddingflow.core.auth import decode_access_token, verify_token

logger = structlog.get_logger(__name__)
security = HTTPBearer()


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> uuid.UUID:
    """Get current user ID from JWT token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user_id = verify_token(credentials.credentials)
    if user_id is None:
        raise credentials_exception

    logger.debug("user_authenticated", user_id=str(user_id))
    return user_id


async def get_company_id(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> uuid.UUID:
    """Get company (tenant) ID from JWT token"""
    payload = decode_access_token(credentials.credentials)
    if payload is None or not payload.get("company_id"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Company ID not found",
        )

    return uuid.UUID(payload["company_id"])


async def get_user_role(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> str:
    """Get user role from JWT token"""
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    role = payload.get("role")
    return role
