"""
Account service: registration, login, profile and password management.
"""
import logging
from typing import Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from moodbuddy.core.exceptions import ConflictException, UnauthorizedException
from moodbuddy.core.security import check_password, hash_password, create_access_token
from moodbuddy.core.utils import local_now
from moodbuddy.models.user import User
from moodbuddy.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

# Profile columns that may be reset to null; the rest keep their value on null
CLEARABLE_PROFILE_FIELDS = {"first_name", "last_name", "date_of_birth"}


def get_user_by_id(user_id: int, db: Session) -> Optional[User]:
    """Fetch a user by primary key."""
    return db.query(User).filter(User.id == user_id).first()


def issue_token(user: User) -> str:
    """Create a session token carrying the user id."""
    return create_access_token(user.id)


def register_user(user_data: UserCreate, db: Session) -> User:
    """Create a new account. Username and email must both be unused."""
    if db.query(User).filter(User.username == user_data.username).first():
        raise ConflictException("Username already exists")

    if db.query(User).filter(User.email == user_data.email).first():
        raise ConflictException("Email already exists")

    user = User(
        username=user_data.username,
        email=user_data.email,
        hashed_password=hash_password(user_data.password)
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration
        db.rollback()
        raise ConflictException("Username or email already exists")
    db.refresh(user)

    logger.info(f"Registered user {user.id} ({user.username})")
    return user


def authenticate_user(email: str, password: str, db: Session) -> Tuple[User, str]:
    """Check credentials and stamp last login. Returns the user and a fresh token."""
    user = db.query(User).filter(User.email == email).first()

    if not user or not check_password(password, user.hashed_password):
        logger.info(f"Failed login attempt for {email}")
        raise UnauthorizedException("Invalid email or password")

    if not user.is_active:
        logger.info(f"Login attempt for deactivated user {user.id}")
        raise UnauthorizedException("Account has been deactivated")

    user.last_login = local_now()
    db.commit()
    db.refresh(user)

    return user, issue_token(user)


def update_profile(user: User, update: UserUpdate, db: Session) -> User:
    """Apply a partial profile/settings update."""
    changes = {}
    if update.profile is not None:
        changes.update(update.profile.model_dump(exclude_unset=True))
    if update.settings is not None:
        changes.update(update.settings.model_dump(exclude_unset=True))

    for field, value in changes.items():
        if value is None and field not in CLEARABLE_PROFILE_FIELDS:
            continue
        setattr(user, field, value)

    db.commit()
    db.refresh(user)

    logger.debug(f"Updated profile fields {sorted(changes)} for user {user.id}")
    return user


def change_password(user: User, current_password: str, new_password: str, db: Session) -> None:
    """Rotate the password after checking the current one."""
    if not check_password(current_password, user.hashed_password):
        raise UnauthorizedException("Current password is incorrect")

    user.hashed_password = hash_password(new_password)
    db.commit()

    logger.info(f"Password changed for user {user.id}")


def deactivate_user(user: User, db: Session) -> None:
    """Soft-disable the account. Entries are kept."""
    user.is_active = False
    db.commit()

    logger.info(f"Deactivated user {user.id}")
