"""Statutory payroll taxes for one paycheck.

- Social Security: employee + employer, capped at the SS wage base
- Medicare: employee + employer, no cap
- Colorado FAMLI (state disability/leave): employee + employer, no cap
- Colorado SUTA: employer only, capped at the state unemployment wage base
- FUTA: employer only, capped at the federal unemployment wage base

Each capped tax tracks its own wage base against the caregiver's YTD wages
before this paycheck, so SUTA and FUTA stop months before Social Security.
"""

import logging
from decimal import Decimal

from ..errors import InvalidInputError
from ..money import ZERO, Number, round_cents, to_decimal
from .schemas import StatutoryTaxes, TaxRateConfiguration

logger = logging.getLogger(__name__)


def capped_taxable_wages(gross_pay: Number, ytd_gross_wages_before: Number, wage_base: Number) -> Decimal:
    """Portion of this paycheck still under a wage base.

    Example: base 184,500, YTD 184,450, gross 200 -> 50
    """
    gross = to_decimal(gross_pay)
    remaining = max(ZERO, to_decimal(wage_base) - to_decimal(ytd_gross_wages_before))
    return min(gross, remaining)


def compute_statutory_taxes(
    gross_pay: Number,
    ytd_gross_wages_before: Number,
    config: TaxRateConfiguration,
) -> StatutoryTaxes:
    """Calculate all statutory payroll taxes for a paycheck.

    Args:
        gross_pay: Gross wages for this paycheck
        ytd_gross_wages_before: Caregiver's YTD gross wages before this paycheck
        config: Tax rate configuration for the paycheck's year

    Returns:
        StatutoryTaxes with employee and employer legs and their totals

    Raises:
        InvalidInputError: If gross pay or YTD wages are negative
    """
    gross = to_decimal(gross_pay)
    ytd = to_decimal(ytd_gross_wages_before)
    if gross < 0:
        raise InvalidInputError(f"gross_pay must be non-negative, got {gross}", field="gross_pay")
    if ytd < 0:
        raise InvalidInputError(
            f"ytd_gross_wages_before must be non-negative, got {ytd}", field="ytd_gross_wages_before"
        )

    ss_wages = capped_taxable_wages(gross, ytd, config.ss_wage_base)
    suta_wages = capped_taxable_wages(gross, ytd, config.state_unemployment_wage_base)
    futa_wages = capped_taxable_wages(gross, ytd, config.federal_unemployment_wage_base)

    ss_employee = round_cents(ss_wages * config.ss_rate_employee)
    ss_employer = round_cents(ss_wages * config.ss_rate_employer)
    medicare_employee = round_cents(gross * config.medicare_rate_employee)
    medicare_employer = round_cents(gross * config.medicare_rate_employer)
    state_disability_employee = round_cents(gross * config.state_disability_rate_employee)
    state_disability_employer = round_cents(gross * config.state_disability_rate_employer)
    state_unemployment = round_cents(suta_wages * config.state_unemployment_rate)
    federal_unemployment = round_cents(futa_wages * config.federal_unemployment_rate)

    if ss_wages < gross:
        logger.info(f"SS wage base reached: {ss_wages} of {gross} taxable (YTD before {ytd})")

    return StatutoryTaxes(
        ss_employee=ss_employee,
        ss_employer=ss_employer,
        medicare_employee=medicare_employee,
        medicare_employer=medicare_employer,
        state_disability_employee=state_disability_employee,
        state_disability_employer=state_disability_employer,
        state_unemployment=state_unemployment,
        federal_unemployment=federal_unemployment,
        total_employee_taxes=ss_employee + medicare_employee + state_disability_employee,
        total_employer_taxes=(
            ss_employer + medicare_employer + state_disability_employer + state_unemployment + federal_unemployment
        ),
    )
