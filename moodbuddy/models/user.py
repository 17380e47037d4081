"""
User model for authentication, profile settings and streak tracking.
"""
from sqlalchemy import Column, String, Boolean, Date, DateTime, Integer, Enum as SQLEnum
from sqlalchemy.orm import relationship
from moodbuddy.db.base import BaseModel
import enum


class Gender(str, enum.Enum):
    """Gender options for the profile."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer-not-to-say"


class Theme(str, enum.Enum):
    """UI theme preference."""
    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


class WeekStart(str, enum.Enum):
    """First day of the week in calendar views."""
    SUNDAY = "sunday"
    MONDAY = "monday"


class User(BaseModel):
    """User model. Accounts are deactivated, never deleted."""
    __tablename__ = "users"

    username = Column(String(30), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime, nullable=True)

    # Profile
    first_name = Column(String(50), nullable=True)
    last_name = Column(String(50), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(SQLEnum(Gender), default=Gender.PREFER_NOT_TO_SAY, nullable=False)

    # Settings
    daily_reminder = Column(Boolean, default=True, nullable=False, index=True)
    reminder_time = Column(String(5), default="20:00", nullable=False)
    theme = Column(SQLEnum(Theme), default=Theme.AUTO, nullable=False)
    week_starts_on = Column(SQLEnum(WeekStart), default=WeekStart.SUNDAY, nullable=False)

    # Streak
    current_streak = Column(Integer, default=0, nullable=False)
    longest_streak = Column(Integer, default=0, nullable=False)
    last_entry_date = Column(Date, nullable=True)

    # Relationships
    mood_entries = relationship("MoodEntry", back_populates="user")
