"""
Pydantic schemas for statistics and calendar views.
"""
from pydantic import BaseModel
from typing import List
from datetime import date
from moodbuddy.models.mood import Mood, Activity
from moodbuddy.schemas.user import StreakResponse


class MoodStat(BaseModel):
    """Entry count and mean intensity for one mood."""
    mood: Mood
    count: int
    avg_intensity: float


class ActivityStat(BaseModel):
    """How often an activity appears in the window."""
    activity: Activity
    count: int


class StatsResponse(BaseModel):
    """Combined statistics for GET /mood/stats."""
    mood_distribution: List[MoodStat] = []
    activity_frequency: List[ActivityStat] = []
    streak: StreakResponse
    average_mood: float
    period: int  # window length in days


class CalendarDay(BaseModel):
    """Per-day projection of an entry for month grids."""
    date: date
    mood: Mood
    intensity: int
    has_journal: bool
    activities: List[Activity] = []


class CalendarPeriod(BaseModel):
    """First and last day of the resolved month."""
    start: date
    end: date
