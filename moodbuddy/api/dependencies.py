"""
Shared route dependencies.
"""
import logging
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from moodbuddy.core.exceptions import UnauthorizedException
from moodbuddy.core.security import decode_access_token
from moodbuddy.db.session import get_db
from moodbuddy.models.user import User
from moodbuddy.services.auth_service import get_user_by_id

logger = logging.getLogger(__name__)

# auto_error=False so a missing header yields our 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token to an active user."""
    if credentials is None:
        raise UnauthorizedException("Not authorized: No token provided")

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        logger.debug("Rejected invalid or expired token")
        raise UnauthorizedException("Not authorized: Invalid or expired token")

    user = get_user_by_id(user_id, db)
    if not user or not user.is_active:
        raise UnauthorizedException("Not authorized: User not found or inactive")

    return user
