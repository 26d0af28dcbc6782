"""Day-type classification for worked hours.

Labels a calendar date as regular, weekend or holiday. Holidays are the ten
U.S. federal holidays, computed per year from fixed dates and
"Nth weekday of month" rules. Holiday takes precedence over weekend.

Operates on calendar dates only; no timezones are involved. Holidays are
matched on their actual calendar date, not the observed weekday.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from functools import lru_cache
from typing import List, Literal, Optional, Tuple, Union

DayType = Literal["regular", "weekend", "holiday"]
DAY_TYPES: Tuple[str, ...] = ("regular", "weekend", "holiday")

DateLike = Union[date, str]

MONDAY, THURSDAY = 0, 3


@dataclass(frozen=True)
class Holiday:
    name: str
    date: date


def parse_date(value: DateLike) -> date:
    """Parse a date in YYYY-MM-DD format (date objects pass through)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, "%Y-%m-%d").date()


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date:
    """Get the Nth occurrence of a weekday in a month.

    Args:
        year: Year
        month: Month (1-12)
        weekday: Day of week (0=Monday ... 6=Sunday)
        n: Which occurrence (1=first, 2=second, ...)
    """
    first = date(year, month, 1)
    days_until = (weekday - first.weekday()) % 7
    return date(year, month, 1 + days_until + (n - 1) * 7)


def last_weekday_of_month(year: int, month: int, weekday: int) -> date:
    """Get the last occurrence of a weekday in a month."""
    last_day = calendar.monthrange(year, month)[1]
    last = date(year, month, last_day)
    days_back = (last.weekday() - weekday) % 7
    return date(year, month, last_day - days_back)


@lru_cache(maxsize=64)
def _holidays(year: int) -> Tuple[Holiday, ...]:
    return (
        Holiday("New Year's Day", date(year, 1, 1)),
        Holiday("Martin Luther King Jr. Day", nth_weekday_of_month(year, 1, MONDAY, 3)),
        Holiday("Presidents' Day", nth_weekday_of_month(year, 2, MONDAY, 3)),
        Holiday("Memorial Day", last_weekday_of_month(year, 5, MONDAY)),
        Holiday("Independence Day", date(year, 7, 4)),
        Holiday("Labor Day", nth_weekday_of_month(year, 9, MONDAY, 1)),
        Holiday("Columbus Day", nth_weekday_of_month(year, 10, MONDAY, 2)),
        Holiday("Veterans Day", date(year, 11, 11)),
        Holiday("Thanksgiving Day", nth_weekday_of_month(year, 11, THURSDAY, 4)),
        Holiday("Christmas Day", date(year, 12, 25)),
    )


def holidays_for_year(year: int) -> List[Holiday]:
    """Get all ten U.S. federal holidays for a year, in calendar order."""
    return list(_holidays(year))


def holiday_name(value: DateLike) -> Optional[str]:
    """Get the holiday name for a date, or None if it is not a holiday."""
    d = parse_date(value)
    for holiday in _holidays(d.year):
        if holiday.date == d:
            return holiday.name
    return None


def is_holiday(value: DateLike) -> bool:
    return holiday_name(value) is not None


def is_weekend(value: DateLike) -> bool:
    return parse_date(value).weekday() >= 5


def classify(value: DateLike) -> DayType:
    """Get the day type for a date.

    Priority: holiday > weekend > regular, so Independence Day on a
    Saturday is a holiday.
    """
    if is_holiday(value):
        return "holiday"
    if is_weekend(value):
        return "weekend"
    return "regular"
