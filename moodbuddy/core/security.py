"""
Password hashing and session tokens.

Passwords are digested with SHA256 before bcrypt so long passphrases are not
cut at bcrypt's 72-byte input limit. Session tokens are HS256 JWTs whose
subject is the user id.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import hashlib
import bcrypt
from jose import JWTError, jwt
from moodbuddy.core.config import settings


def _digest(password: str) -> bytes:
    return hashlib.sha256(password.encode("utf-8")).digest()


def hash_password(password: str) -> str:
    """Return the bcrypt hash stored in ``users.hashed_password``."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_digest(password), salt).decode("utf-8")


def check_password(password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(_digest(password), hashed_password.encode("utf-8"))


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a session token for ``user_id``, valid for ACCESS_TOKEN_EXPIRE_DAYS by default."""
    lifetime = expires_delta if expires_delta is not None else timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    claims = {
        "sub": str(user_id),
        "user_id": user_id,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[int]:
    """Return the user id carried by a valid token, or None if it is expired, forged or malformed."""
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    user_id = claims.get("user_id")
    return user_id if isinstance(user_id, int) else None
