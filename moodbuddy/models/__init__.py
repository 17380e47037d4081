"""Models package - Import all models for SQLAlchemy registration."""
from moodbuddy.models.user import User, Gender, Theme, WeekStart
from moodbuddy.models.mood import MoodEntry, Mood, Activity, Weather

__all__ = [
    "User",
    "Gender",
    "Theme",
    "WeekStart",
    "MoodEntry",
    "Mood",
    "Activity",
    "Weather",
]
