"""
Unit tests for week and month helpers, and weekly submission validation.
"""

import pytest
from datetime import date, datetime, timezone

from app.auth import create_session_token, decode_session_token
from app.config import utc_now, utc_now_naive
from app.schemas.effort import DayLog, EffortCreate, WeeklyEffortSubmission
from app.services.effort_service import (
    get_week_bounds,
    get_week_start_monday,
    month_label,
    weeks_in_range,
    validate_weekly_submission,
)


class TestGetWeekStartMonday:
    """Tests for get_week_start_monday."""

    def test_monday_is_its_own_start(self):
        assert get_week_start_monday(date(2024, 1, 15)) == date(2024, 1, 15)

    def test_sunday_maps_back_to_monday(self):
        # Sunday Jan 21, 2024 belongs to the week of Monday Jan 15
        assert get_week_start_monday(date(2024, 1, 21)) == date(2024, 1, 15)

    def test_crosses_month_boundary(self):
        # Thursday Feb 1, 2024 -> Monday Jan 29, 2024
        assert get_week_start_monday(date(2024, 2, 1)) == date(2024, 1, 29)

    def test_crosses_year_boundary(self):
        # Wednesday Jan 1, 2025 -> Monday Dec 30, 2024
        assert get_week_start_monday(date(2025, 1, 1)) == date(2024, 12, 30)


class TestGetWeekBounds:
    """Tests for get_week_bounds."""

    def test_bounds_span_seven_days(self):
        start, end = get_week_bounds(date(2024, 1, 17))
        assert start == date(2024, 1, 15)
        assert end == date(2024, 1, 21)

    def test_leap_day(self):
        start, end = get_week_bounds(date(2024, 2, 29))
        assert start == date(2024, 2, 26)
        assert end == date(2024, 3, 3)


class TestWeeksInRange:
    """Tests for weeks_in_range."""

    def test_single_week(self):
        assert weeks_in_range(date(2024, 1, 15), date(2024, 1, 21)) == [date(2024, 1, 15)]

    def test_wednesday_to_tuesday_spans_two_weeks(self):
        assert weeks_in_range(date(2024, 1, 17), date(2024, 1, 23)) == [
            date(2024, 1, 15),
            date(2024, 1, 22),
        ]

    def test_single_sunday(self):
        assert weeks_in_range(date(2024, 1, 21), date(2024, 1, 21)) == [date(2024, 1, 15)]


class TestUtcNow:
    """Tests for the UTC clock helpers."""

    def test_aware(self):
        assert utc_now().tzinfo == timezone.utc

    def test_naive_for_storage(self):
        assert utc_now_naive().tzinfo is None

    def test_session_token_round_trip(self):
        token = create_session_token(5)
        data = decode_session_token(token)
        assert data["user_id"] == 5
        assert datetime.fromisoformat(data["created"]).tzinfo is not None


class TestMonthLabel:
    """Tests for month_label."""

    def test_january(self):
        assert month_label(date(2024, 1, 31)) == "JANUARY"

    def test_december(self):
        assert month_label(date(2024, 12, 1)) == "DECEMBER"


class TestValidateWeeklySubmission:
    """Tests for validate_weekly_submission."""

    def test_valid_submission(self):
        submission = WeeklyEffortSubmission(
            cohort_id=1,
            week_start_date=date(2024, 1, 15),
            week_end_date=date(2024, 1, 21),
            day_logs=[DayLog(date=date(2024, 1, 21))],
        )
        validate_weekly_submission(submission)

    def test_missing_day_logs_is_valid(self):
        submission = WeeklyEffortSubmission(
            cohort_id=1,
            week_start_date=date(2024, 1, 15),
            week_end_date=date(2024, 1, 21),
        )
        validate_weekly_submission(submission)

    def test_end_before_start(self):
        submission = WeeklyEffortSubmission(
            cohort_id=1,
            week_start_date=date(2024, 1, 21),
            week_end_date=date(2024, 1, 15),
        )
        with pytest.raises(ValueError, match="before week start"):
            validate_weekly_submission(submission)

    def test_day_before_week(self):
        submission = WeeklyEffortSubmission(
            cohort_id=1,
            week_start_date=date(2024, 1, 15),
            week_end_date=date(2024, 1, 21),
            day_logs=[DayLog(date=date(2024, 1, 14))],
        )
        with pytest.raises(ValueError, match="outside the submitted week"):
            validate_weekly_submission(submission)


class TestSubmissionParsing:
    """The wire format is camelCase."""

    def test_camel_case_payload(self):
        submission = WeeklyEffortSubmission.model_validate({
            "cohortId": 3,
            "weekStartDate": "2024-01-15",
            "weekEndDate": "2024-01-21",
            "dayLogs": [
                {
                    "date": "2024-01-15",
                    "isHoliday": False,
                    "trainer": {"hours": 4, "notes": "Intro"},
                    "buddyMentor": {"hours": "1.5"},
                },
            ],
        })

        day = submission.day_logs[0]
        assert submission.cohort_id == 3
        assert day.trainer.notes == "Intro"
        assert str(day.buddy_mentor.hours) == "1.5"
        assert day.mentor is None

    def test_negative_hours_rejected(self):
        with pytest.raises(ValueError):
            DayLog.model_validate({"date": "2024-01-15", "trainer": {"hours": -1}})

    def test_hours_above_column_limit_rejected(self):
        with pytest.raises(ValueError):
            DayLog.model_validate({"date": "2024-01-15", "trainer": {"hours": "1000"}})

    def test_hours_with_three_decimals_rejected(self):
        with pytest.raises(ValueError):
            EffortCreate.model_validate({
                "cohortId": 1,
                "trainerMentorId": 2,
                "role": "TRAINER",
                "effortHours": "1.125",
                "effortDate": "2024-01-15",
            })

    def test_largest_hours_accepted(self):
        day = DayLog.model_validate({"date": "2024-01-15", "trainer": {"hours": "999.99"}})
        assert str(day.trainer.hours) == "999.99"
