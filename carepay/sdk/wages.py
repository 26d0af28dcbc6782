"""Wage aggregation by day type.

Groups worked-hours entries into regular, weekend and holiday buckets, prices
each bucket at the base rate times its premium multiplier, and totals gross
wages.

Rounding order matters: each premium rate is rounded to the cent first, then
each bucket subtotal, then the gross sum. Rounding only the final sum gives
different cents on fractional-hour inputs.

Overtime is opt-in. When enabled, hours over 12 in a day and regular-day
hours over 40 in a Monday-start workweek move to the overtime bucket, which
is priced at base rate times the overtime multiplier.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List

from .day_types import classify
from .errors import InvalidInputError
from .money import ZERO, Number, round_cents, to_decimal
from .schemas import CategoryWages, HoursByType, WagesByType, WorkedHoursEntry

logger = logging.getLogger(__name__)

MAX_DAILY_HOURS = Decimal("24")
DAILY_OVERTIME_THRESHOLD = Decimal("12")
WEEKLY_OVERTIME_THRESHOLD = Decimal("40")
DEFAULT_OVERTIME_MULTIPLIER = Decimal("1.5")


@dataclass(frozen=True)
class WageAggregation:
    hours_by_type: HoursByType
    wages_by_type: WagesByType
    gross_wages: Decimal

    @property
    def total_hours(self) -> Decimal:
        return self.hours_by_type.total


def validate_entries(entries: Iterable[WorkedHoursEntry]) -> None:
    """Reject negative hours and dates worked beyond MAX_DAILY_HOURS.

    Raises:
        InvalidInputError: On the first offending entry
    """
    per_date: Dict[date, Decimal] = defaultdict(lambda: ZERO)
    for entry in entries:
        if entry.hours < 0:
            raise InvalidInputError(
                f"Hours for {entry.date} must be non-negative, got {entry.hours}",
                field="hours",
                context={"date": entry.date.isoformat()},
            )
        per_date[entry.date] += entry.hours
        if per_date[entry.date] > MAX_DAILY_HOURS:
            raise InvalidInputError(
                f"Hours for {entry.date} total {per_date[entry.date]}, more than {MAX_DAILY_HOURS} in one day",
                field="hours",
                context={"date": entry.date.isoformat()},
            )


def validate_rates(base_rate: Decimal, **multipliers: Decimal) -> None:
    if base_rate < 0:
        raise InvalidInputError(f"base_rate must be non-negative, got {base_rate}", field="base_rate")
    for name, value in multipliers.items():
        if value < 0:
            raise InvalidInputError(f"{name} must be non-negative, got {value}", field=name)


def resolve_day_type(entry: WorkedHoursEntry) -> str:
    """Explicit day_type on the entry wins over the calendar."""
    return entry.day_type or classify(entry.date)


def _week_start(d: date) -> date:
    return d - timedelta(days=d.weekday())


def categorize_hours(entries: List[WorkedHoursEntry], overtime_enabled: bool = False) -> HoursByType:
    """Total hours per day type, moving overtime hours out when enabled."""
    totals: Dict[str, Decimal] = {"regular": ZERO, "weekend": ZERO, "holiday": ZERO, "overtime": ZERO}
    regular_by_week: Dict[date, Decimal] = defaultdict(lambda: ZERO)
    worked_by_date: Dict[date, Decimal] = defaultdict(lambda: ZERO)

    for entry in entries:
        day_type = resolve_day_type(entry)
        hours = entry.hours

        if overtime_enabled:
            # Daily threshold applies to the date's total, consumed in entry order
            remaining = max(ZERO, DAILY_OVERTIME_THRESHOLD - worked_by_date[entry.date])
            worked_by_date[entry.date] += hours
            if hours > remaining:
                totals["overtime"] += hours - remaining
                hours = remaining

        totals[day_type] += hours
        if day_type == "regular":
            regular_by_week[_week_start(entry.date)] += hours

    if overtime_enabled:
        for week, hours in sorted(regular_by_week.items()):
            if hours > WEEKLY_OVERTIME_THRESHOLD:
                extra = hours - WEEKLY_OVERTIME_THRESHOLD
                logger.debug(f"week of {week}: {hours} regular hours, {extra} to overtime")
                totals["overtime"] += extra
                totals["regular"] -= extra

    return HoursByType(**totals)


def price_hours(
    hours_by_type: HoursByType,
    base_rate: Number,
    holiday_multiplier: Number,
    weekend_multiplier: Number,
    overtime_multiplier: Number = DEFAULT_OVERTIME_MULTIPLIER,
) -> WagesByType:
    """Rate and subtotal per category. Zero-hour categories still carry their rate."""
    base = to_decimal(base_rate)
    rates = {
        "regular": base,
        "weekend": round_cents(base * to_decimal(weekend_multiplier)),
        "holiday": round_cents(base * to_decimal(holiday_multiplier)),
        "overtime": round_cents(base * to_decimal(overtime_multiplier)),
    }

    lines = {}
    for category, rate in rates.items():
        hours = getattr(hours_by_type, category)
        lines[category] = CategoryWages(hours=hours, rate=rate, subtotal=round_cents(hours * rate))
    return WagesByType(**lines)


def aggregate(
    entries: List[WorkedHoursEntry],
    base_rate: Number,
    holiday_multiplier: Number,
    weekend_multiplier: Number,
    overtime_enabled: bool = False,
    overtime_multiplier: Number = DEFAULT_OVERTIME_MULTIPLIER,
) -> WageAggregation:
    """Turn worked-hours entries into hours, wages and gross pay by day type.

    Args:
        entries: Worked-hours entries for the pay period
        base_rate: Regular hourly rate
        holiday_multiplier: Premium multiplier for holiday hours (e.g. 2.0)
        weekend_multiplier: Premium multiplier for weekend hours (e.g. 1.5)
        overtime_enabled: Apply daily (>12h) and weekly (>40h) overtime
        overtime_multiplier: Premium multiplier for overtime hours

    Returns:
        WageAggregation with hours_by_type, wages_by_type and gross_wages

    Raises:
        InvalidInputError: On negative hours, >24 hours on a date, or negative rates
    """
    base = to_decimal(base_rate)
    holiday_mult = to_decimal(holiday_multiplier)
    weekend_mult = to_decimal(weekend_multiplier)
    overtime_mult = to_decimal(overtime_multiplier)

    validate_rates(
        base,
        holiday_multiplier=holiday_mult,
        weekend_multiplier=weekend_mult,
        overtime_multiplier=overtime_mult,
    )
    validate_entries(entries)

    hours_by_type = categorize_hours(entries, overtime_enabled=overtime_enabled)
    wages_by_type = price_hours(hours_by_type, base, holiday_mult, weekend_mult, overtime_mult)
    gross_wages = round_cents(
        wages_by_type.regular.subtotal
        + wages_by_type.weekend.subtotal
        + wages_by_type.holiday.subtotal
        + wages_by_type.overtime.subtotal
    )

    logger.debug(f"aggregated {len(entries)} entries: {hours_by_type.total} hours, gross {gross_wages}")
    return WageAggregation(hours_by_type=hours_by_type, wages_by_type=wages_by_type, gross_wages=gross_wages)
