"""
Streak calculation for consecutive journaling days.

A streak only moves on entry creation. Updating or deleting an entry never
touches it, so the stored (current, longest, last_entry_date) triple is the
whole state.
"""
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional
from moodbuddy.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreakState:
    current: int = 0
    longest: int = 0
    last_entry_date: Optional[date] = None


def advance_streak(state: StreakState, today: date) -> StreakState:
    """Return the streak after an entry is created on ``today``."""
    if state.last_entry_date is None:
        return StreakState(current=1, longest=1, last_entry_date=today)

    yesterday = today - timedelta(days=1)
    current = state.current
    longest = state.longest

    if state.last_entry_date == yesterday:
        current += 1
    elif state.last_entry_date == today:
        # Second creation on the same day (a back-dated entry): no change
        pass
    else:
        current = 1

    return StreakState(current=current, longest=max(longest, current), last_entry_date=today)


def apply_streak(user: User, today: date) -> StreakState:
    """Advance the user's stored streak in place. The caller commits."""
    previous = StreakState(
        current=user.current_streak or 0,
        longest=user.longest_streak or 0,
        last_entry_date=user.last_entry_date,
    )
    updated = advance_streak(previous, today)

    user.current_streak = updated.current
    user.longest_streak = updated.longest
    user.last_entry_date = updated.last_entry_date

    logger.debug(
        f"Streak for user {user.id}: {previous.current}/{previous.longest} -> "
        f"{updated.current}/{updated.longest}"
    )
    return updated
