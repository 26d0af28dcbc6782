"""Pydantic schemas for payroll calculation input and results.

All schemas use extra='forbid' to reject unknown fields, so a typo in an
hours file fails loudly instead of being ignored. Results are frozen values:
one is produced per calculation and handed to persistence and reporting.
"""

import datetime as dt
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .day_types import DayType
from .taxes.schemas import StatutoryTaxes


class WorkedHoursEntry(BaseModel):
    """Hours worked by one caregiver on one date.

    day_type overrides the calendar classification (e.g. a household that
    treats Christmas Eve as a holiday).
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    date: dt.date
    hours: Decimal
    day_type: Optional[DayType] = None


class HoursByType(BaseModel):
    """Hour totals per category. Overtime hours are carved out of the others."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    regular: Decimal = Decimal("0")
    weekend: Decimal = Decimal("0")
    holiday: Decimal = Decimal("0")
    overtime: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.regular + self.weekend + self.holiday + self.overtime


class CategoryWages(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    hours: Decimal
    rate: Decimal
    subtotal: Decimal


class WagesByType(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    regular: CategoryWages
    weekend: CategoryWages
    holiday: CategoryWages
    overtime: CategoryWages


class PayrollCalculationInput(BaseModel):
    """One caregiver's pay period.

    federal_withholding is the figure from a prior withholding pass; leave it
    unset on the first pass. ytd_wages_before overrides the YTD lookup.
    """
    model_config = ConfigDict(extra="forbid", frozen=True, coerce_numbers_to_str=True)

    caregiver_id: str
    entries: List[WorkedHoursEntry] = Field(default_factory=list)
    base_rate: Decimal
    holiday_multiplier: Decimal = Decimal("2.0")
    weekend_multiplier: Decimal = Decimal("1.5")
    federal_withholding: Optional[Decimal] = None
    ytd_wages_before: Optional[Decimal] = None
    pay_period_end: Optional[dt.date] = None
    overtime_enabled: bool = False
    overtime_multiplier: Decimal = Decimal("1.5")

    @property
    def tax_year(self) -> Optional[int]:
        return self.pay_period_end.year if self.pay_period_end else None


class PayrollCalculationResult(BaseModel):
    """Hours, wages, taxes and net pay for one caregiver's paycheck."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    caregiver_id: str
    total_hours: Decimal
    hours_by_type: HoursByType
    wages_by_type: WagesByType
    gross_wages: Decimal
    taxes: StatutoryTaxes
    federal_withholding: Decimal
    total_employee_withholdings: Decimal = Field(
        ..., description="Federal withholding + SS + Medicare + state disability (employee)"
    )
    net_pay: Decimal
    calculation_version: str
    tax_version: str
    is_minimum_wage_compliant: bool = True
