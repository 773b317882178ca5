"""
Test suite for KST week boundary calculations.

Tests Monday anchoring (including Sunday), Friday deadlines, strict expiry
at the deadline, and normalization of naive timestamps read back from the
store.

System role: Verification of calendar arithmetic
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

import pytest

from weekly_vote.core import time_calculator
from weekly_vote.core.time_calculator import KST


@dataclass
class SessionStub:
    """Plain object exposing the fields the calculator reads."""

    week_start_date: date
    end_time: datetime | None = None
    is_active: bool = True
    is_completed: bool = False


class TestCurrentTime:
    """Test suite for current_time()."""

    def test_current_time_should_be_aware_kst(self) -> None:
        """Test current_time carries the +09:00 offset."""
        now = time_calculator.current_time()

        assert now.tzinfo is not None
        assert now.utcoffset() == timedelta(hours=9)


class TestToKst:
    """Test suite for to_kst()."""

    def test_to_kst_should_convert_aware_utc(self) -> None:
        """Test an aware UTC instant is rendered in KST."""
        value = datetime(2025, 11, 2, 15, 30, tzinfo=timezone.utc)

        result = time_calculator.to_kst(value)

        assert result == value
        assert (result.day, result.hour, result.minute) == (3, 0, 30)

    def test_to_kst_should_read_naive_as_kst_wall_clock(self) -> None:
        """Test naive values keep their wall-clock and gain the KST offset."""
        result = time_calculator.to_kst(datetime(2025, 11, 7, 23, 59, 59, 999000))

        assert result == datetime(2025, 11, 7, 23, 59, 59, 999000, tzinfo=KST)


class TestStartOfCurrentWeek:
    """Test suite for start_of_current_week()."""

    @pytest.mark.parametrize(
        "now",
        [
            datetime(2025, 11, 3, 0, 0, tzinfo=KST),  # Monday midnight
            datetime(2025, 11, 4, 15, 0, tzinfo=KST),  # Tuesday
            datetime(2025, 11, 7, 23, 59, tzinfo=KST),  # Friday
            datetime(2025, 11, 9, 23, 59, tzinfo=KST),  # Sunday
        ],
    )
    def test_start_of_current_week_should_return_monday_midnight(
        self, now: datetime
    ) -> None:
        """Test every day of the Mon-Sun week anchors to the same Monday."""
        result = time_calculator.start_of_current_week(now)

        assert result == datetime(2025, 11, 3, 0, 0, tzinfo=KST)

    def test_start_of_current_week_should_use_kst_date_for_utc_input(self) -> None:
        """Test Sunday 16:00 UTC is already Monday in KST."""
        now = datetime(2025, 11, 2, 16, 0, tzinfo=timezone.utc)

        result = time_calculator.start_of_current_week(now)

        assert result == datetime(2025, 11, 3, 0, 0, tzinfo=KST)

    def test_start_of_next_week_should_add_seven_days(self) -> None:
        """Test next week starts on the following Monday."""
        now = datetime(2025, 11, 9, 12, 0, tzinfo=KST)

        result = time_calculator.start_of_next_week(now)

        assert result == datetime(2025, 11, 10, 0, 0, tzinfo=KST)


class TestEndOfWeek:
    """Test suite for end_of_week()."""

    def test_end_of_week_should_return_friday_last_millisecond(self) -> None:
        """Test deadline is Friday 23:59:59.999 KST."""
        result = time_calculator.end_of_week(date(2025, 11, 3))

        assert result == datetime(2025, 11, 7, 23, 59, 59, 999000, tzinfo=KST)

    def test_end_of_week_should_accept_datetime(self) -> None:
        """Test a Monday timestamp gives the same deadline as its date."""
        monday = datetime(2025, 11, 10, 0, 0, tzinfo=KST)

        result = time_calculator.end_of_week(monday)

        assert result == datetime(2025, 11, 14, 23, 59, 59, 999000, tzinfo=KST)

    def test_discussion_start_should_be_monday_one_minute_past_midnight(self) -> None:
        """Test discussion opens Monday 00:01 of the current week."""
        now = datetime(2025, 11, 5, 9, 0, tzinfo=KST)

        result = time_calculator.discussion_start(now)

        assert result == datetime(2025, 11, 3, 0, 1, tzinfo=KST)


class TestIsExpired:
    """Test suite for is_expired() and session_deadline()."""

    def test_is_expired_should_be_false_at_exact_deadline(self) -> None:
        """Test a session is still open at its deadline instant."""
        session = SessionStub(week_start_date=date(2025, 11, 3))
        deadline = datetime(2025, 11, 7, 23, 59, 59, 999000, tzinfo=KST)

        assert time_calculator.is_expired(session, deadline) is False

    def test_is_expired_should_be_true_one_millisecond_after_deadline(self) -> None:
        """Test a session expires once the deadline has passed."""
        session = SessionStub(week_start_date=date(2025, 11, 3))
        after = datetime(2025, 11, 8, 0, 0, 0, tzinfo=KST)

        assert time_calculator.is_expired(session, after) is True

    def test_is_expired_should_prefer_explicit_end_time(self) -> None:
        """Test end_time overrides the computed Friday deadline."""
        session = SessionStub(
            week_start_date=date(2025, 11, 3),
            end_time=datetime(2025, 11, 4, 12, 0, tzinfo=KST),
        )
        now = datetime(2025, 11, 5, 0, 0, tzinfo=KST)

        assert time_calculator.is_expired(session, now) is True

    def test_is_expired_should_treat_naive_end_time_as_kst(self) -> None:
        """Test naive end_time from SQLite compares as KST wall-clock."""
        session = SessionStub(
            week_start_date=date(2025, 10, 20),
            end_time=datetime(2025, 10, 24, 23, 59, 59, 999000),
        )

        assert time_calculator.is_expired(
            session, datetime(2025, 10, 24, 23, 59, 59, 999000, tzinfo=KST)
        ) is False
        assert time_calculator.is_expired(
            session, datetime(2025, 10, 25, 0, 0, tzinfo=KST)
        ) is True

    def test_session_deadline_should_fall_back_to_friday(self) -> None:
        """Test session without end_time ends on Friday of its week."""
        session = SessionStub(week_start_date=date(2025, 11, 10))

        assert time_calculator.session_deadline(session) == datetime(
            2025, 11, 14, 23, 59, 59, 999000, tzinfo=KST
        )


class TestIsSessionActive:
    """Test suite for is_session_active()."""

    @pytest.fixture
    def now(self) -> datetime:
        return datetime(2025, 11, 5, 12, 0, tzinfo=KST)

    def test_is_session_active_should_be_true_for_open_session(self, now: datetime) -> None:
        session = SessionStub(week_start_date=date(2025, 11, 3))

        assert time_calculator.is_session_active(session, now) is True

    def test_is_session_active_should_be_false_when_completed(self, now: datetime) -> None:
        session = SessionStub(week_start_date=date(2025, 11, 3), is_completed=True)

        assert time_calculator.is_session_active(session, now) is False

    def test_is_session_active_should_be_false_when_inactive(self, now: datetime) -> None:
        session = SessionStub(week_start_date=date(2025, 11, 3), is_active=False)

        assert time_calculator.is_session_active(session, now) is False

    def test_is_session_active_should_be_false_when_expired(self, now: datetime) -> None:
        session = SessionStub(week_start_date=date(2025, 10, 27))

        assert time_calculator.is_session_active(session, now) is False
