"""
Mood journal routes: entries, statistics and calendar.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date
from moodbuddy.db.session import get_db
from moodbuddy.models.user import User
from moodbuddy.schemas.mood import MoodEntryCreate, MoodEntryUpdate, MoodEntryResponse
from moodbuddy.schemas.user import StreakResponse
from moodbuddy.api.dependencies import get_current_user
from moodbuddy.core.utils import (
    success_response, paginated_response, validate_pagination, validate_date_range
)
from moodbuddy.services import mood_service, stats_service

router = APIRouter(prefix="/mood", tags=["mood"])


def entry_to_dict(entry) -> dict:
    """Serialize an ORM entry, including derived fields."""
    return MoodEntryResponse.model_validate(entry).model_dump(mode="json")


@router.get("/entries")
async def list_entries(
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List entries newest first, optionally within a date range."""
    page, limit = validate_pagination(page, limit)
    validate_date_range(start_date, end_date)

    entries, total = mood_service.list_entries(current_user.id, start_date, end_date, page, limit, db)
    return paginated_response([entry_to_dict(e) for e in entries], total, page, limit)


@router.post("/entries", status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_data: MoodEntryCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create the entry for a day (today unless a past date is given)."""
    entry, streak = mood_service.create_entry(current_user, entry_data, db)
    return success_response(
        entry_to_dict(entry),
        message="Mood entry created successfully",
        streak=StreakResponse(
            current=streak.current,
            longest=streak.longest,
            last_entry_date=streak.last_entry_date
        ).model_dump(mode="json")
    )


# Must be registered before /entries/{entry_id}
@router.get("/entries/today")
async def get_today_entry(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get today's entry; data is null when there is none yet."""
    entry = mood_service.get_today_entry(current_user.id, db)
    return {"success": True, "data": entry_to_dict(entry) if entry else None}


@router.get("/entries/{entry_id}")
async def get_entry(
    entry_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a single entry."""
    entry = mood_service.get_owned_entry(entry_id, current_user.id, db)
    return success_response(entry_to_dict(entry))


@router.put("/entries/{entry_id}")
async def update_entry(
    entry_id: int,
    update: MoodEntryUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update fields of an entry."""
    entry = mood_service.update_entry(current_user.id, entry_id, update, db)
    return success_response(entry_to_dict(entry), message="Mood entry updated successfully")


@router.delete("/entries/{entry_id}")
async def delete_entry(
    entry_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an entry."""
    mood_service.delete_entry(current_user.id, entry_id, db)
    return success_response(message="Mood entry deleted successfully")


@router.get("/stats")
async def get_stats(
    days: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Mood distribution, activity frequency, streak and average mood."""
    days = stats_service.validate_days(days)
    stats = stats_service.get_overall_stats(current_user, days, db)
    return success_response(stats.model_dump(mode="json"))


@router.get("/calendar")
async def get_calendar(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Entries of one month for calendar rendering."""
    days, period = stats_service.get_calendar(current_user.id, year, month, db)
    return success_response(
        [day.model_dump(mode="json") for day in days],
        period=period.model_dump(mode="json")
    )
