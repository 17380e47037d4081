"""
Statistics over a user's mood entries: distributions, averages, calendar.

The folds (mood_distribution, activity_frequency, average_intensity) are pure
functions over already-loaded entries; the get_* functions load the window
from the database and apply them.
"""
import calendar
import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Tuple
from sqlalchemy.orm import Session
from moodbuddy.core.config import settings
from moodbuddy.core.exceptions import ValidationException, field_error
from moodbuddy.core.utils import local_today
from moodbuddy.models.mood import MoodEntry
from moodbuddy.models.user import User
from moodbuddy.schemas.stats import (
    MoodStat, ActivityStat, StatsResponse, CalendarDay, CalendarPeriod
)
from moodbuddy.schemas.user import streak_from_user
from moodbuddy.services.mood_service import get_entries_by_date_range

logger = logging.getLogger(__name__)


def mood_distribution(entries: Iterable[MoodEntry]) -> List[MoodStat]:
    """Count and mean intensity per mood, most frequent first."""
    counts: Dict[str, int] = {}
    intensity_totals: Dict[str, int] = {}

    for entry in entries:
        mood = entry.mood
        counts[mood] = counts.get(mood, 0) + 1
        intensity_totals[mood] = intensity_totals.get(mood, 0) + entry.mood_intensity

    stats = [
        MoodStat(mood=mood, count=count, avg_intensity=round(intensity_totals[mood] / count, 2))
        for mood, count in counts.items()
    ]
    stats.sort(key=lambda s: (-s.count, s.mood.value))
    return stats


def activity_frequency(entries: Iterable[MoodEntry]) -> List[ActivityStat]:
    """How many entries mention each activity, most frequent first."""
    counts: Dict[str, int] = {}
    for entry in entries:
        for activity in entry.activities or []:
            counts[activity] = counts.get(activity, 0) + 1

    stats = [ActivityStat(activity=activity, count=count) for activity, count in counts.items()]
    stats.sort(key=lambda s: (-s.count, s.activity.value))
    return stats


def average_intensity(entries: Iterable[MoodEntry]) -> float:
    """Mean intensity rounded to one decimal; 0 when there are no entries."""
    intensities = [entry.mood_intensity for entry in entries]
    if not intensities:
        return 0
    return round(sum(intensities) / len(intensities), 1)


def validate_days(days: Optional[int]) -> int:
    """Default and bound the statistics window length."""
    if days is None:
        return settings.DEFAULT_STATS_DAYS
    if days < 1:
        raise ValidationException(
            "Invalid statistics period",
            errors=[field_error("days", "Days must be at least 1")],
        )
    return days


def _entries_in_window(user_id: int, days: int, db: Session) -> List[MoodEntry]:
    start = local_today() - timedelta(days=days)
    return get_entries_by_date_range(user_id, start, None, db)


def get_mood_stats(user_id: int, days: int, db: Session) -> List[MoodStat]:
    """Mood distribution over the trailing window."""
    return mood_distribution(_entries_in_window(user_id, days, db))


def get_activity_stats(user_id: int, days: int, db: Session) -> List[ActivityStat]:
    """Activity frequency over the trailing window."""
    return activity_frequency(_entries_in_window(user_id, days, db))


def get_overall_stats(user: User, days: int, db: Session) -> StatsResponse:
    """Everything GET /mood/stats reports, from a single window query."""
    entries = _entries_in_window(user.id, days, db)
    logger.debug(f"Computing stats for user {user.id} over {len(entries)} entries ({days} days)")

    return StatsResponse(
        mood_distribution=mood_distribution(entries),
        activity_frequency=activity_frequency(entries),
        streak=streak_from_user(user),
        average_mood=average_intensity(entries),
        period=days
    )


def resolve_month(year: Optional[int], month: Optional[int], today: date) -> Tuple[date, date]:
    """First and last day of the requested month; missing parts come from today."""
    year = year if year is not None else today.year
    month = month if month is not None else today.month

    errors = []
    if not 1 <= month <= 12:
        errors.append(field_error("month", "Month must be between 1 and 12"))
    if not 1 <= year <= 9999:
        errors.append(field_error("year", "Year must be between 1 and 9999"))
    if errors:
        raise ValidationException("Invalid calendar period", errors=errors)

    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def get_calendar(
    user_id: int,
    year: Optional[int],
    month: Optional[int],
    db: Session
) -> Tuple[List[CalendarDay], CalendarPeriod]:
    """Month view: one row per entry plus the resolved period."""
    start, end = resolve_month(year, month, local_today())
    entries = get_entries_by_date_range(user_id, start, end, db)

    days = [
        CalendarDay(
            date=entry.date,
            mood=entry.mood,
            intensity=entry.mood_intensity,
            has_journal=bool(entry.journal_entry),
            activities=entry.activities or []
        )
        for entry in entries
    ]
    return days, CalendarPeriod(start=start, end=end)
