from datetime import date, datetime, timedelta

import pytest

from src.audit_sla.domain import BusinessCalendar, get_business_calendar
from src.core.exceptions import ValidationException
from tests.helpers import et, fixed_clock, utc


def wall(dt: datetime) -> datetime:
    return dt.replace(tzinfo=None)


class TestIsBusinessDay:
    def test_monday_to_friday_are_business_days(self, calendar):
        assert calendar.is_business_day(et(2025, 1, 6)) is True
        assert calendar.is_business_day(et(2025, 1, 10)) is True

    def test_weekend_is_not_business_day(self, calendar):
        assert calendar.is_business_day(et(2025, 1, 11)) is False
        assert calendar.is_business_day(et(2025, 1, 12)) is False

    def test_every_weekday_of_a_week(self, calendar):
        start = date(2025, 1, 6)
        flags = [calendar.is_business_day(start + timedelta(days=i)) for i in range(7)]
        assert flags == [True, True, True, True, True, False, False]

    def test_weekday_is_read_in_new_york_not_utc(self, calendar):
        # Saturday 03:00 UTC is still Friday evening in New York
        assert calendar.is_business_day(utc(2025, 1, 11, 3, 0)) is True
        # Monday 02:00 UTC is still Sunday evening in New York
        assert calendar.is_business_day(utc(2025, 1, 13, 2, 0)) is False

    def test_accepts_plain_dates(self, calendar):
        assert calendar.is_business_day(date(2025, 1, 6)) is True
        assert calendar.is_business_day(date(2025, 1, 12)) is False


class TestAddBusinessDays:
    def test_three_days_within_a_week(self, calendar):
        result = calendar.add_business_days(et(2025, 1, 6), 3)
        assert result.date() == date(2025, 1, 9)

    def test_skips_weekend(self, calendar):
        result = calendar.add_business_days(et(2025, 1, 10), 3)
        assert result.date() == date(2025, 1, 15)

    def test_keeps_time_of_day(self, calendar):
        result = calendar.add_business_days(et(2025, 1, 10, 9, 30), 1)
        assert wall(result) == datetime(2025, 1, 13, 9, 30)

    def test_skip_dates_are_not_counted(self, calendar):
        result = calendar.add_business_days(et(2025, 1, 17, 9, 0), 1, skip={date(2025, 1, 20)})
        assert wall(result) == datetime(2025, 1, 21, 9, 0)

    def test_skip_dates_on_weekend_change_nothing(self, calendar):
        start = et(2025, 1, 10, 9, 0)
        assert calendar.add_business_days(start, 1, skip={date(2025, 1, 11)}) == \
            calendar.add_business_days(start, 1)

    def test_skip_across_spring_forward(self, calendar):
        # Friday 2025-03-07 EST, Monday 03-10 skipped, lands Tuesday 03-11 EDT
        result = calendar.add_business_days(et(2025, 3, 7, 9, 0), 1, skip={date(2025, 3, 10)})
        assert wall(result) == datetime(2025, 3, 11, 9, 0)
        assert result.utcoffset() == timedelta(hours=-4)

    def test_start_day_is_never_counted(self, calendar):
        result = calendar.add_business_days(et(2025, 1, 6, 9, 0), 1)
        assert result.date() == date(2025, 1, 7)

    def test_weekend_start_lands_on_monday(self, calendar):
        result = calendar.add_business_days(et(2025, 1, 11, 10, 0), 1)
        assert wall(result) == datetime(2025, 1, 13, 10, 0)

    def test_zero_is_identity_after_zone_conversion(self, calendar):
        start = utc(2025, 1, 11, 15, 0)
        result = calendar.add_business_days(start, 0)
        assert result == calendar.to_reference_zone(start)
        assert wall(result) == datetime(2025, 1, 11, 10, 0)

    def test_result_is_in_new_york(self, calendar):
        result = calendar.add_business_days(utc(2025, 1, 6, 14, 0), 2)
        assert result.tzinfo.key == "America/New_York"
        assert wall(result) == datetime(2025, 1, 8, 9, 0)

    def test_across_spring_forward(self, calendar):
        # DST starts Sunday 2025-03-09
        result = calendar.add_business_days(et(2025, 3, 7, 9, 0), 1)
        assert wall(result) == datetime(2025, 3, 10, 9, 0)
        assert result.utcoffset() == timedelta(hours=-4)
        assert result == utc(2025, 3, 10, 13, 0)

    def test_across_fall_back(self, calendar):
        # DST ends Sunday 2025-11-02
        result = calendar.add_business_days(et(2025, 10, 31, 9, 0), 1)
        assert wall(result) == datetime(2025, 11, 3, 9, 0)
        assert result.utcoffset() == timedelta(hours=-5)
        assert result == utc(2025, 11, 3, 14, 0)

    def test_from_transition_day_itself(self, calendar):
        result = calendar.add_business_days(et(2025, 3, 9, 12, 0), 1)
        assert wall(result) == datetime(2025, 3, 10, 12, 0)

    def test_late_evening_utc_input_counts_from_new_york_day(self, calendar):
        # Friday 22:00 ET, written as Saturday 03:00 UTC
        result = calendar.add_business_days(utc(2025, 1, 11, 3, 0), 1)
        assert wall(result) == datetime(2025, 1, 13, 22, 0)

    @pytest.mark.parametrize("days", [-1, 1.5, True, "3", None])
    def test_rejects_invalid_day_counts(self, calendar, days):
        with pytest.raises(ValidationException):
            calendar.add_business_days(et(2025, 1, 6), days)


class TestGetBusinessDaysBetween:
    def test_full_week_is_inclusive(self, calendar):
        assert calendar.get_business_days_between(et(2025, 1, 6), et(2025, 1, 10)) == 5

    def test_friday_to_monday_counts_both_ends(self, calendar):
        assert calendar.get_business_days_between(et(2025, 1, 10), et(2025, 1, 13)) == 2

    def test_order_does_not_matter(self, calendar):
        forward = calendar.get_business_days_between(et(2025, 1, 10), et(2025, 1, 13))
        backward = calendar.get_business_days_between(et(2025, 1, 13), et(2025, 1, 10))
        assert forward == backward == 2

    def test_same_business_day_is_one(self, calendar):
        assert calendar.get_business_days_between(et(2025, 1, 6, 8, 0), et(2025, 1, 6, 20, 0)) == 1

    def test_same_weekend_day_is_zero(self, calendar):
        assert calendar.get_business_days_between(et(2025, 1, 11, 8, 0), et(2025, 1, 11, 9, 0)) == 0

    def test_weekend_only_is_zero(self, calendar):
        assert calendar.get_business_days_between(et(2025, 1, 11), et(2025, 1, 12)) == 0

    def test_time_of_day_is_ignored(self, calendar):
        assert calendar.get_business_days_between(et(2025, 1, 6, 18, 0), et(2025, 1, 10, 8, 0)) == 5

    def test_whole_year(self, calendar):
        assert calendar.get_business_days_between(date(2025, 1, 1), date(2025, 12, 31)) == 261

    def test_across_dst_transitions(self, calendar):
        assert calendar.get_business_days_between(et(2025, 3, 7, 9, 0), et(2025, 3, 10, 9, 0)) == 2
        assert calendar.get_business_days_between(et(2025, 10, 31, 9, 0), et(2025, 11, 3, 9, 0)) == 2

    def test_days_are_taken_in_new_york(self, calendar):
        # Both instants are Friday 2025-01-10 in New York
        assert calendar.get_business_days_between(utc(2025, 1, 10, 15, 0), utc(2025, 1, 11, 3, 0)) == 1


class TestGetBusinessDayDeadline:
    def test_pinned_to_five_pm(self, calendar):
        deadline = calendar.get_business_day_deadline(et(2025, 1, 6, 9, 0), 3)
        assert deadline == et(2025, 1, 9, 17, 0)
        assert (deadline.hour, deadline.minute, deadline.second, deadline.microsecond) == (17, 0, 0, 0)

    def test_fourth_business_day(self, calendar):
        deadline = calendar.get_business_day_deadline(et(2025, 1, 6, 9, 0), 4)
        assert deadline == et(2025, 1, 10, 17, 0)

    def test_dispute_review_next_day(self, calendar):
        deadline = calendar.get_business_day_deadline(et(2025, 1, 8, 14, 0), 1)
        assert deadline == et(2025, 1, 9, 17, 0)

    def test_iso_format(self, calendar):
        deadline = calendar.get_business_day_deadline(et(2025, 1, 6, 9, 0), 3)
        assert deadline.isoformat() == "2025-01-09T17:00:00-05:00"

    def test_offset_follows_deadline_date(self, calendar):
        deadline = calendar.get_business_day_deadline(et(2025, 3, 7, 9, 0), 1)
        assert wall(deadline) == datetime(2025, 3, 10, 17, 0)
        assert deadline.utcoffset() == timedelta(hours=-4)

    def test_week_long_window_across_spring_forward(self, calendar):
        deadline = calendar.get_business_day_deadline(et(2025, 3, 7, 9, 0), 5)
        assert deadline == et(2025, 3, 14, 17, 0)

    def test_zero_days_on_business_day_is_same_day(self, calendar):
        assert calendar.get_business_day_deadline(et(2025, 1, 8, 14, 0), 0) == et(2025, 1, 8, 17, 0)

    def test_zero_days_on_weekend_rolls_to_monday(self, calendar):
        assert calendar.get_business_day_deadline(et(2025, 1, 11, 10, 0), 0) == et(2025, 1, 13, 17, 0)

    def test_deadline_always_on_business_day(self, calendar):
        start = et(2025, 1, 1, 12, 0)
        for offset in range(14):
            for days in range(6):
                deadline = calendar.get_business_day_deadline(start + timedelta(days=offset), days)
                assert calendar.is_business_day(deadline)


class TestDeadlineClock:
    # calendar fixture clock: Wednesday 2025-01-08 14:00 ET

    def test_passed_deadline(self, calendar):
        assert calendar.is_deadline_passed(et(2025, 1, 8, 13, 59)) is True

    def test_exact_deadline_is_not_passed(self, calendar):
        assert calendar.is_deadline_passed(et(2025, 1, 8, 14, 0)) is False

    def test_future_deadline(self, calendar):
        assert calendar.is_deadline_passed(et(2025, 1, 9, 17, 0)) is False

    def test_equality_across_zones(self, calendar):
        assert calendar.is_deadline_passed(utc(2025, 1, 8, 19, 0)) is False

    def test_explicit_now_overrides_clock(self, calendar):
        deadline = et(2025, 1, 9, 17, 0)
        assert calendar.is_deadline_passed(deadline, now=et(2025, 1, 9, 17, 0, 1)) is True

    def test_remaining_for_deadline_later_today_is_one(self, calendar):
        assert calendar.get_remaining_business_days(et(2025, 1, 8, 17, 0)) == 1

    def test_remaining_counts_today(self, calendar):
        assert calendar.get_remaining_business_days(et(2025, 1, 9, 17, 0)) == 2
        assert calendar.get_remaining_business_days(et(2025, 1, 13, 17, 0)) == 4

    def test_remaining_is_zero_once_passed(self, calendar):
        deadline = et(2025, 1, 7, 17, 0)
        assert calendar.is_deadline_passed(deadline) is True
        assert calendar.get_remaining_business_days(deadline) == 0

    def test_remaining_at_exact_deadline(self, calendar):
        assert calendar.get_remaining_business_days(et(2025, 1, 8, 14, 0)) == 1

    def test_remaining_from_weekend(self):
        calendar = BusinessCalendar(clock=fixed_clock(et(2025, 1, 11, 12, 0)))
        assert calendar.get_remaining_business_days(et(2025, 1, 13, 17, 0)) == 1


class TestReferenceZone:
    def test_now_uses_injected_clock(self):
        calendar = BusinessCalendar(clock=fixed_clock(utc(2025, 1, 8, 19, 0)))
        now = calendar.now()
        assert wall(now) == datetime(2025, 1, 8, 14, 0)
        assert now.tzinfo.key == "America/New_York"

    def test_default_clock_is_live(self):
        before = datetime.now().astimezone()
        now = BusinessCalendar().now()
        assert now.tzinfo.key == "America/New_York"
        assert abs(now - before) < timedelta(minutes=1)

    def test_timezone_is_new_york(self, calendar):
        assert calendar.timezone.key == "America/New_York"

    def test_naive_datetime_is_new_york_wall_time(self, calendar):
        assert calendar.to_reference_zone(datetime(2025, 1, 6, 9, 0)) == et(2025, 1, 6, 9, 0)

    def test_date_is_midnight(self, calendar):
        assert calendar.to_reference_zone(date(2025, 1, 6)) == et(2025, 1, 6, 0, 0)

    def test_utc_is_converted(self, calendar):
        result = calendar.to_reference_zone(utc(2025, 7, 1, 12, 0))
        assert wall(result) == datetime(2025, 7, 1, 8, 0)

    @pytest.mark.parametrize("instant", [
        et(2025, 1, 6, 9, 0),
        utc(2025, 3, 9, 7, 30),
        datetime(2025, 11, 2, 1, 30),
        datetime(2025, 11, 2, 1, 30, fold=1),
        date(2025, 6, 1),
    ])
    def test_idempotent(self, calendar, instant):
        once = calendar.to_reference_zone(instant)
        twice = calendar.to_reference_zone(once)
        assert twice == once
        assert wall(twice) == wall(once)
        assert twice.utcoffset() == once.utcoffset()

    def test_spring_forward_gap_resolves_forward(self, calendar):
        result = calendar.to_reference_zone(datetime(2025, 3, 9, 2, 30))
        assert wall(result) == datetime(2025, 3, 9, 3, 30)
        assert result.utcoffset() == timedelta(hours=-4)

    def test_repeated_hour_follows_fold(self, calendar):
        first = calendar.to_reference_zone(datetime(2025, 11, 2, 1, 30))
        second = calendar.to_reference_zone(datetime(2025, 11, 2, 1, 30, fold=1))
        assert first.utcoffset() == timedelta(hours=-4)
        assert second.utcoffset() == timedelta(hours=-5)

    @pytest.mark.parametrize("instant", [None, "2025-01-06", 1736150400])
    def test_rejects_invalid_instants(self, calendar, instant):
        with pytest.raises(ValidationException):
            calendar.to_reference_zone(instant)

    def test_operations_fail_fast_on_missing_input(self, calendar):
        with pytest.raises(ValidationException):
            calendar.is_business_day(None)
        with pytest.raises(ValidationException):
            calendar.is_deadline_passed(None)
        with pytest.raises(ValidationException):
            calendar.get_business_days_between(et(2025, 1, 6), None)

    def test_shared_calendar_is_cached(self):
        assert get_business_calendar() is get_business_calendar()
