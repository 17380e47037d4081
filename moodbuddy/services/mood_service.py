"""
Mood entry service for entry-related business logic.
"""
import logging
from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from moodbuddy.core.exceptions import (
    ConflictException, NotFoundException, ValidationException, field_error
)
from moodbuddy.core.utils import local_today
from moodbuddy.models.mood import MoodEntry
from moodbuddy.models.user import User
from moodbuddy.schemas.mood import MoodEntryCreate, MoodEntryUpdate
from moodbuddy.services.streak_service import StreakState, apply_streak

logger = logging.getLogger(__name__)

# Columns an update may set back to null
CLEARABLE_ENTRY_FIELDS = {"journal_entry", "sleep_hours", "weather", "location"}


def get_entry_for_date(
    user_id: int,
    entry_date: date,
    db: Session,
    exclude_id: Optional[int] = None
) -> Optional[MoodEntry]:
    """Get the user's entry for a calendar day, optionally ignoring one entry."""
    query = db.query(MoodEntry).filter(
        MoodEntry.user_id == user_id,
        MoodEntry.date == entry_date
    )
    if exclude_id is not None:
        query = query.filter(MoodEntry.id != exclude_id)
    return query.first()


def get_owned_entry(entry_id: int, user_id: int, db: Session) -> MoodEntry:
    """
    Get an entry that belongs to the user.
    Entries owned by someone else are reported exactly like missing ones.
    """
    entry = db.query(MoodEntry).filter(
        MoodEntry.id == entry_id,
        MoodEntry.user_id == user_id
    ).first()
    if not entry:
        raise NotFoundException("Mood entry not found")
    return entry


def _check_not_future(entry_date: date, today: date) -> None:
    if entry_date > today:
        raise ValidationException(
            "Entry date cannot be in the future",
            errors=[field_error("date", "Entry date cannot be in the future")],
        )


def _commit_entry(entry: MoodEntry, db: Session) -> None:
    """Commit, turning a (user, date) unique violation into a conflict."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictException("Mood entry already exists for the selected date")
    db.refresh(entry)


def create_entry(user: User, entry_data: MoodEntryCreate, db: Session) -> Tuple[MoodEntry, StreakState]:
    """Create an entry and advance the user's streak in the same transaction."""
    today = local_today()
    entry_date = entry_data.date or today
    _check_not_future(entry_date, today)

    if get_entry_for_date(user.id, entry_date, db):
        raise ConflictException("Mood entry already exists for this date")

    entry = MoodEntry(
        user_id=user.id,
        date=entry_date,
        mood=entry_data.mood,
        mood_intensity=entry_data.mood_intensity,
        journal_entry=entry_data.journal_entry,
        tags=entry_data.tags,
        activities=[activity.value for activity in entry_data.activities],
        sleep_hours=entry_data.sleep_hours,
        weather=entry_data.weather,
        location=entry_data.location,
        is_public=entry_data.is_public
    )
    db.add(entry)
    streak = apply_streak(user, today)
    _commit_entry(entry, db)

    logger.info(f"User {user.id} created mood entry {entry.id} for {entry_date} (streak {streak.current})")
    return entry, streak


def update_entry(user_id: int, entry_id: int, update: MoodEntryUpdate, db: Session) -> MoodEntry:
    """Apply a partial update. A new date must still be unique and not in the future."""
    entry = get_owned_entry(entry_id, user_id, db)
    changes = update.model_dump(exclude_unset=True)

    new_date = changes.get("date")
    if new_date is not None and new_date != entry.date:
        _check_not_future(new_date, local_today())
        if get_entry_for_date(user_id, new_date, db, exclude_id=entry.id):
            raise ConflictException("Mood entry already exists for the selected date")

    if changes.get("activities") is not None:
        changes["activities"] = [activity.value for activity in update.activities]

    for field, value in changes.items():
        if value is None and field not in CLEARABLE_ENTRY_FIELDS:
            continue
        setattr(entry, field, value)

    _commit_entry(entry, db)

    logger.info(f"User {user_id} updated mood entry {entry.id}")
    return entry


def delete_entry(user_id: int, entry_id: int, db: Session) -> None:
    """Hard-delete an owned entry. The streak is left as it is."""
    entry = get_owned_entry(entry_id, user_id, db)
    db.delete(entry)
    db.commit()

    logger.info(f"User {user_id} deleted mood entry {entry_id}")


def list_entries(
    user_id: int,
    start_date: Optional[date],
    end_date: Optional[date],
    page: int,
    limit: int,
    db: Session
) -> Tuple[List[MoodEntry], int]:
    """Return one page of entries (newest first) and the total match count."""
    query = db.query(MoodEntry).filter(MoodEntry.user_id == user_id)
    if start_date:
        query = query.filter(MoodEntry.date >= start_date)
    if end_date:
        query = query.filter(MoodEntry.date <= end_date)

    total = query.count()
    entries = query.order_by(MoodEntry.date.desc()).offset((page - 1) * limit).limit(limit).all()
    return entries, total


def get_today_entry(user_id: int, db: Session) -> Optional[MoodEntry]:
    """Get the entry for the current calendar day, if any."""
    return get_entry_for_date(user_id, local_today(), db)


def get_entries_by_date_range(
    user_id: int,
    start_date: date,
    end_date: Optional[date],
    db: Session
) -> List[MoodEntry]:
    """All entries in [start_date, end_date], newest first. Without end_date the range is open."""
    query = db.query(MoodEntry).filter(
        MoodEntry.user_id == user_id,
        MoodEntry.date >= start_date
    )
    if end_date:
        query = query.filter(MoodEntry.date <= end_date)
    return query.order_by(MoodEntry.date.desc()).all()
