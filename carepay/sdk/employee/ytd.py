"""Year-to-date wages from payroll records.

The persistence layer owns payroll records; this module only sums them.
A record counts toward YTD when it belongs to the caregiver, its pay period
ends in the year, it is finalized and it is not voided. Drafts and voided
checks never consume wage base.

Record shape (one JSON object per paycheck):
    {"caregiver_id": "1", "pay_period_end": "2026-03-13",
     "gross_wages": 1280.00, "is_finalized": true, "is_voided": false}
"""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..config import get_data_path
from ..day_types import DateLike, parse_date
from ..money import ZERO, round_cents, to_decimal

logger = logging.getLogger(__name__)

PAYROLL_RECORDS_FILENAME = "payroll_records.json"

YtdWagesLookup = Callable[[str, int], Decimal]


def _counts_toward_ytd(record: Dict[str, Any]) -> bool:
    return bool(record.get("is_finalized")) and not record.get("is_voided")


def ytd_gross_wages(
    records: Iterable[Dict[str, Any]],
    caregiver_id: str,
    year: int,
    before: Optional[DateLike] = None,
) -> Decimal:
    """Sum gross wages paid to a caregiver in a year.

    Args:
        records: Payroll records
        caregiver_id: Caregiver to sum for
        year: Calendar year of pay_period_end
        before: If given, only records ending strictly before this date

    Returns:
        Total gross wages (0 if none)
    """
    cutoff = parse_date(before) if before is not None else None
    total = ZERO
    for record in records:
        if str(record.get("caregiver_id")) != str(caregiver_id):
            continue
        if not _counts_toward_ytd(record):
            continue
        period_end = parse_date(record["pay_period_end"])
        if period_end.year != int(year):
            continue
        if cutoff is not None and period_end >= cutoff:
            continue
        total += to_decimal(record.get("gross_wages", 0))
    return round_cents(total)


def make_ytd_lookup(records: List[Dict[str, Any]], before: Optional[DateLike] = None) -> YtdWagesLookup:
    """Build a (caregiver_id, year) -> YTD wages lookup over a fixed record list."""
    def lookup(caregiver_id: str, year: int) -> Decimal:
        return ytd_gross_wages(records, caregiver_id, year, before=before)
    return lookup


def get_payroll_records_path() -> Path:
    return get_data_path() / PAYROLL_RECORDS_FILENAME


def load_payroll_records(path: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Load payroll records from a JSON list.

    Returns:
        Records (empty list if the file doesn't exist)
    """
    path = path or get_payroll_records_path()
    if not path.exists():
        logger.debug(f"no payroll records at {path}; YTD wages are 0")
        return []

    with open(path, "r") as f:
        records = json.load(f)

    if not isinstance(records, list):
        raise ValueError(f"Payroll records file must hold a JSON list: {path}")
    return records
