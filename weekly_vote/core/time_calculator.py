"""
Week boundary calculations in Korea Standard Time.

Pure functions computing the anchor timezone's current time and the
Monday-to-Friday polling window. KST is a fixed UTC+9 offset with no DST,
so a fixed-offset tzinfo is used instead of the host timezone database.

Naive datetimes are read as KST wall-clock time. SQLite returns stored
timestamps without their offset, so values coming back from the store are
normalized through to_kst() before any comparison.

Dependencies: datetime (stdlib)
System role: Calendar arithmetic for the weekly vote session lifecycle
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Protocol

KST = timezone(timedelta(hours=9), "KST")

# Discussion opens one minute after midnight on the Monday before the polled week.
DISCUSSION_OPENS_AT = time(0, 1)
# Voting closes at the last millisecond of Friday.
VOTING_CLOSES_AT = time(23, 59, 59, 999000)
FRIDAY_OFFSET = timedelta(days=4)


class SessionWindow(Protocol):
    """Attributes needed to evaluate a session's deadline."""

    week_start_date: date
    end_time: datetime | None


class SessionStatus(SessionWindow, Protocol):
    """Attributes needed to evaluate whether a session is open."""

    is_active: bool
    is_completed: bool


def current_time() -> datetime:
    """Return the current instant rendered in KST."""
    return datetime.now(KST)


def to_kst(value: datetime) -> datetime:
    """
    Normalize a timestamp to KST.

    Args:
        value: Aware timestamp in any zone, or naive KST wall-clock time

    Returns:
        datetime: Aware timestamp in KST
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=KST)
    return value.astimezone(KST)


def _as_kst_midnight(day: date | datetime) -> datetime:
    if isinstance(day, datetime):
        day = to_kst(day).date()
    return datetime.combine(day, time.min, tzinfo=KST)


def start_of_current_week(now: datetime) -> datetime:
    """
    Monday 00:00:00.000 KST of the Mon-Sun week containing now.

    Sunday belongs to the week that started the previous Monday.

    Args:
        now: Reference timestamp

    Returns:
        datetime: Monday midnight in KST
    """
    local = to_kst(now)
    # weekday(): Monday=0 .. Sunday=6
    monday = local.date() - timedelta(days=local.weekday())
    return _as_kst_midnight(monday)


def start_of_next_week(now: datetime) -> datetime:
    """Monday 00:00:00.000 KST of the week after the one containing now."""
    return start_of_current_week(now) + timedelta(days=7)


def end_of_week(week_monday: date | datetime) -> datetime:
    """
    Voting deadline for a polled week: Friday 23:59:59.999 KST.

    Args:
        week_monday: Monday of the polled week (date or timestamp)

    Returns:
        datetime: Friday end-of-day in KST
    """
    friday = _as_kst_midnight(week_monday).date() + FRIDAY_OFFSET
    return datetime.combine(friday, VOTING_CLOSES_AT, tzinfo=KST)


def discussion_start(now: datetime) -> datetime:
    """Monday 00:01 KST of the week containing now."""
    monday = start_of_current_week(now)
    return datetime.combine(monday.date(), DISCUSSION_OPENS_AT, tzinfo=KST)


def session_deadline(session: SessionWindow) -> datetime:
    """Explicit end_time if set, otherwise Friday of the session's week."""
    if session.end_time is not None:
        return to_kst(session.end_time)
    return end_of_week(session.week_start_date)


def is_expired(session: SessionWindow, now: datetime | None = None) -> bool:
    """
    Whether the session's deadline has passed.

    The comparison is strict: at exactly the deadline the session is
    still open.

    Args:
        session: Session exposing week_start_date and end_time
        now: Reference timestamp (defaults to current_time())

    Returns:
        bool: True if deadline < now
    """
    reference = to_kst(now) if now is not None else current_time()
    return session_deadline(session) < reference


def is_session_active(session: SessionStatus, now: datetime | None = None) -> bool:
    """Active, not completed and not past its deadline."""
    if not session.is_active or session.is_completed:
        return False
    return not is_expired(session, now)
