"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from datetime import date, datetime
import re
from moodbuddy.models.user import User, Gender, Theme, WeekStart

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
REMINDER_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
MIN_PASSWORD_LENGTH = 6


def _check_password(value: str, label: str = "Password") -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"{label} must be at least {MIN_PASSWORD_LENGTH} characters")
    return value


class UserCreate(BaseModel):
    """Schema for user registration."""
    username: str
    email: EmailStr
    password: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not 3 <= len(v) <= 30:
            raise ValueError("Username must be between 3 and 30 characters")
        if not USERNAME_PATTERN.match(v):
            raise ValueError("Username can only contain letters, numbers, and underscores")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password(v)


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class ProfileUpdate(BaseModel):
    """Partial profile update. Omitted fields are left untouched."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, v: Optional[str], info) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if len(v) > 50:
            label = "First name" if info.field_name == "first_name" else "Last name"
            raise ValueError(f"{label} cannot exceed 50 characters")
        return v


class SettingsUpdate(BaseModel):
    """Partial settings update."""
    daily_reminder: Optional[bool] = None
    reminder_time: Optional[str] = None
    theme: Optional[Theme] = None
    week_starts_on: Optional[WeekStart] = None

    @field_validator("reminder_time")
    @classmethod
    def validate_reminder_time(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not REMINDER_TIME_PATTERN.match(v):
            raise ValueError("Reminder time must be in HH:MM format")
        return v


class UserUpdate(BaseModel):
    """Schema for PUT /auth/profile."""
    profile: Optional[ProfileUpdate] = None
    settings: Optional[SettingsUpdate] = None


class PasswordChange(BaseModel):
    """Schema for password rotation."""
    current_password: str
    new_password: str

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v: str) -> str:
        return _check_password(v, "New password")


class ProfileResponse(BaseModel):
    """Profile sub-record."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Gender


class SettingsResponse(BaseModel):
    """Settings sub-record."""
    daily_reminder: bool
    reminder_time: str
    theme: Theme
    week_starts_on: WeekStart


class StreakResponse(BaseModel):
    """Streak sub-record."""
    current: int
    longest: int
    last_entry_date: Optional[date] = None


class UserResponse(BaseModel):
    """Public view of a user. The password hash is never part of it."""
    id: int
    username: str
    email: str
    profile: ProfileResponse
    settings: SettingsResponse
    streak: StreakResponse
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        """Nest the flat user columns into profile/settings/streak records."""
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            profile=ProfileResponse(
                first_name=user.first_name,
                last_name=user.last_name,
                date_of_birth=user.date_of_birth,
                gender=user.gender,
            ),
            settings=SettingsResponse(
                daily_reminder=user.daily_reminder,
                reminder_time=user.reminder_time,
                theme=user.theme,
                week_starts_on=user.week_starts_on,
            ),
            streak=streak_from_user(user),
            is_active=user.is_active,
            last_login=user.last_login,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthResponse(BaseModel):
    """Token plus the authenticated user."""
    user: UserResponse
    access_token: str
    token_type: str = "bearer"


def streak_from_user(user: User) -> StreakResponse:
    """Read the streak columns of a user."""
    return StreakResponse(
        current=user.current_streak,
        longest=user.longest_streak,
        last_entry_date=user.last_entry_date,
    )
