"""Tests for the holiday calendar and day-type classification."""

from datetime import date, datetime

import pytest

from carepay.sdk.day_types import (
    classify,
    holiday_name,
    holidays_for_year,
    is_holiday,
    is_weekend,
    last_weekday_of_month,
    nth_weekday_of_month,
)


class TestHolidayCalendar:
    """Ten federal holidays on their calendar dates."""

    def test_2026_holidays(self):
        dates = [h.date for h in holidays_for_year(2026)]
        assert dates == [
            date(2026, 1, 1),
            date(2026, 1, 19),   # MLK, 3rd Monday
            date(2026, 2, 16),   # Presidents', 3rd Monday
            date(2026, 5, 25),   # Memorial, last Monday
            date(2026, 7, 4),
            date(2026, 9, 7),    # Labor, 1st Monday
            date(2026, 10, 12),  # Columbus, 2nd Monday
            date(2026, 11, 11),
            date(2026, 11, 26),  # Thanksgiving, 4th Thursday
            date(2026, 12, 25),
        ]

    def test_2024_floating_holidays(self):
        by_name = {h.name: h.date for h in holidays_for_year(2024)}
        assert by_name["Martin Luther King Jr. Day"] == date(2024, 1, 15)
        assert by_name["Presidents' Day"] == date(2024, 2, 19)
        assert by_name["Memorial Day"] == date(2024, 5, 27)
        assert by_name["Labor Day"] == date(2024, 9, 2)
        assert by_name["Columbus Day"] == date(2024, 10, 14)
        assert by_name["Thanksgiving Day"] == date(2024, 11, 28)

    @pytest.mark.parametrize("year", [2020, 2024, 2025, 2026, 2028])
    def test_exactly_ten_holidays(self, year):
        holidays = holidays_for_year(year)
        assert len(holidays) == 10
        assert len({h.date for h in holidays}) == 10
        assert all(h.date.year == year for h in holidays)

    def test_no_observed_date_shift(self):
        # July 4, 2026 is a Saturday; Friday July 3 is not a holiday
        assert is_holiday(date(2026, 7, 4))
        assert not is_holiday(date(2026, 7, 3))

    def test_holiday_name(self):
        assert holiday_name("2026-12-25") == "Christmas Day"
        assert holiday_name("2026-12-24") is None


class TestWeekdayHelpers:
    def test_nth_weekday(self):
        # 4th Thursday of November 2025
        assert nth_weekday_of_month(2025, 11, 3, 4) == date(2025, 11, 27)

    def test_last_weekday_leap_year(self):
        # Feb 2028 has 29 days, the 29th is a Tuesday
        assert last_weekday_of_month(2028, 2, 1) == date(2028, 2, 29)


class TestClassify:
    @pytest.mark.parametrize("value,expected", [
        ("2026-03-02", "regular"),   # Monday
        ("2026-03-06", "regular"),   # Friday
        ("2026-03-07", "weekend"),   # Saturday
        ("2026-03-08", "weekend"),   # Sunday
        ("2026-01-19", "holiday"),   # MLK Day, Monday
        ("2026-07-04", "holiday"),   # Saturday holiday: holiday wins
        ("2027-12-25", "holiday"),   # Saturday holiday
    ])
    def test_classify(self, value, expected):
        assert classify(value) == expected

    def test_accepts_date_and_datetime(self):
        assert classify(date(2026, 3, 7)) == "weekend"
        assert classify(datetime(2026, 12, 25, 9, 30)) == "holiday"

    def test_is_weekend(self):
        assert is_weekend("2026-07-04")
        assert not is_weekend("2026-07-03")

    def test_invalid_date_string(self):
        with pytest.raises(ValueError):
            classify("2026-02-30")
