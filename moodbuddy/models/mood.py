"""
Mood entry model for daily journaling.
"""
from sqlalchemy import (
    Column, String, Date, Text, Float, Boolean, ForeignKey, Integer, JSON,
    UniqueConstraint, Index, Enum as SQLEnum
)
from sqlalchemy.orm import relationship
from moodbuddy.db.base import BaseModel
import enum


class Mood(str, enum.Enum):
    """The seven moods a user can log."""
    EXCITED = "excited"
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"
    ANXIOUS = "anxious"
    ANGRY = "angry"
    TIRED = "tired"


class Activity(str, enum.Enum):
    """Activities that can be attached to an entry."""
    EXERCISE = "exercise"
    WORK = "work"
    SOCIAL = "social"
    FAMILY = "family"
    HOBBY = "hobby"
    REST = "rest"
    LEARNING = "learning"
    NATURE = "nature"
    SHOPPING = "shopping"
    CLEANING = "cleaning"
    COOKING = "cooking"
    TRAVEL = "travel"
    ENTERTAINMENT = "entertainment"
    SELF_CARE = "self-care"


class Weather(str, enum.Enum):
    """Weather on the day of the entry."""
    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    SNOWY = "snowy"
    WINDY = "windy"
    STORMY = "stormy"


class MoodEntry(BaseModel):
    """One journal entry per user per calendar day."""
    __tablename__ = "mood_entries"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    mood = Column(SQLEnum(Mood), nullable=False, index=True)
    mood_intensity = Column(Integer, default=5, nullable=False)
    journal_entry = Column(Text, nullable=True)
    tags = Column(JSON, default=list, nullable=False)  # list of str
    activities = Column(JSON, default=list, nullable=False)  # list of Activity values
    sleep_hours = Column(Float, nullable=True)
    weather = Column(SQLEnum(Weather), nullable=True)
    location = Column(String(100), nullable=True)
    is_public = Column(Boolean, default=False, nullable=False)

    # Relationships
    user = relationship("User", back_populates="mood_entries")

    # Unique constraint: one entry per user per day. Authoritative guard;
    # the existence check in mood_service only produces a friendlier error.
    __table_args__ = (
        UniqueConstraint('user_id', 'date', name='uq_user_date_mood_entry'),
        Index('ix_mood_entries_user_created', 'user_id', 'created_at'),
    )
