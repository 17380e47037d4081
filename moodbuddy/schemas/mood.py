"""
Pydantic schemas for MoodEntry entity.
"""
from pydantic import BaseModel, computed_field, field_validator
from typing import List, Optional
from datetime import date as date_type, datetime
from moodbuddy.core.utils import sanitize_input
from moodbuddy.models.mood import Mood, Activity, Weather

MAX_JOURNAL_LENGTH = 2000
MAX_TAG_LENGTH = 20
MAX_LOCATION_LENGTH = 100


class MoodEntryFields(BaseModel):
    """Validators shared by the create and update schemas."""

    @field_validator("mood_intensity", check_fields=False)
    @classmethod
    def validate_intensity(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not 1 <= v <= 10:
            raise ValueError("Mood intensity must be between 1 and 10")
        return v

    @field_validator("journal_entry", check_fields=False)
    @classmethod
    def validate_journal(cls, v: Optional[str]) -> Optional[str]:
        v = sanitize_input(v)
        if v is not None and len(v) > MAX_JOURNAL_LENGTH:
            raise ValueError(f"Journal entry cannot exceed {MAX_JOURNAL_LENGTH} characters")
        return v

    @field_validator("tags", check_fields=False)
    @classmethod
    def validate_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        tags = [sanitize_input(tag) for tag in v]
        if any(len(tag) > MAX_TAG_LENGTH for tag in tags):
            raise ValueError(f"Tag cannot exceed {MAX_TAG_LENGTH} characters")
        return [tag for tag in tags if tag]

    @field_validator("sleep_hours", check_fields=False)
    @classmethod
    def validate_sleep(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not 0 <= v <= 24:
            raise ValueError("Sleep hours must be between 0 and 24")
        return v

    @field_validator("location", check_fields=False)
    @classmethod
    def validate_location(cls, v: Optional[str]) -> Optional[str]:
        v = sanitize_input(v)
        if v is not None and len(v) > MAX_LOCATION_LENGTH:
            raise ValueError(f"Location cannot exceed {MAX_LOCATION_LENGTH} characters")
        return v


class MoodEntryCreate(MoodEntryFields):
    """Schema for mood entry creation. Date defaults to today."""
    mood: Mood
    mood_intensity: int = 5
    journal_entry: Optional[str] = None
    tags: List[str] = []
    activities: List[Activity] = []
    sleep_hours: Optional[float] = None
    weather: Optional[Weather] = None
    location: Optional[str] = None
    is_public: bool = False
    date: Optional[date_type] = None


class MoodEntryUpdate(MoodEntryFields):
    """Schema for mood entry update. Only fields sent are changed."""
    mood: Optional[Mood] = None
    mood_intensity: Optional[int] = None
    journal_entry: Optional[str] = None
    tags: Optional[List[str]] = None
    activities: Optional[List[Activity]] = None
    sleep_hours: Optional[float] = None
    weather: Optional[Weather] = None
    location: Optional[str] = None
    is_public: Optional[bool] = None
    date: Optional[date_type] = None


class MoodEntryResponse(BaseModel):
    """Schema for mood entry response."""
    id: int
    user_id: int
    date: date_type
    mood: Mood
    mood_intensity: int
    journal_entry: Optional[str] = None
    tags: List[str] = []
    activities: List[Activity] = []
    sleep_hours: Optional[float] = None
    weather: Optional[Weather] = None
    location: Optional[str] = None
    is_public: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @computed_field
    @property
    def formatted_date(self) -> str:
        return self.date.isoformat()

    @computed_field
    @property
    def day_of_week(self) -> int:
        """0 = Sunday ... 6 = Saturday."""
        return (self.date.weekday() + 1) % 7
