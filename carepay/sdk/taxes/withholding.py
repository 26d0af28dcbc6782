"""Federal income tax withholding calculations.

Implements the IRS Pub 15-T percentage method for one paycheck from a
caregiver's W-4 elections: annualize, adjust, subtract the standard
deduction, tax through progressive brackets, de-annualize.

Also reports advisory Social Security and Medicare figures for the same
paycheck, computed from the same TaxRateConfiguration the statutory tax
computer uses. They are informational; payroll deductions take FICA from
compute_statutory_taxes().
"""

import logging
from decimal import Decimal
from typing import List

from ..errors import InvalidInputError
from ..money import ZERO, Number, round_cents, to_decimal
from .schemas import (
    FILING_STATUSES,
    AnnualTaxEstimate,
    FederalWithholdingResult,
    TaxBracket,
    TaxRateConfiguration,
    WithholdingBreakdown,
    WithholdingElection,
    WithholdingTables,
)
from .statutory import capped_taxable_wages

logger = logging.getLogger(__name__)

# Pay periods by frequency
PAY_PERIODS = {
    "weekly": 52,
    "biweekly": 26,
    "semimonthly": 24,
    "monthly": 12,
}


def periods_per_year(pay_frequency: str) -> int:
    """Get number of pay periods for a frequency.

    Raises:
        InvalidInputError: If the frequency is not one of PAY_PERIODS
    """
    if pay_frequency not in PAY_PERIODS:
        raise InvalidInputError(
            f"Invalid pay_frequency: {pay_frequency}. Must be one of {tuple(PAY_PERIODS)}",
            field="pay_frequency",
        )
    return PAY_PERIODS[pay_frequency]


def bracket_tax(taxable_income: Number, brackets: List[TaxBracket]) -> Decimal:
    """Tax on annual taxable income through progressive marginal brackets.

    Each bracket taxes only the slice of income between the previous limit
    and its own limit. The walk stops at the first bracket whose limit meets
    or exceeds the income; the last bracket is open-ended.

    Args:
        taxable_income: Annual taxable income (after standard deduction)
        brackets: Brackets in ascending order, last one with up_to=None

    Returns:
        Annual tax, unrounded
    """
    income = to_decimal(taxable_income)
    tax = ZERO
    previous_limit = ZERO

    for bracket in brackets:
        if income <= previous_limit:
            break
        if bracket.up_to is None or income <= bracket.up_to:
            tax += (income - previous_limit) * bracket.rate
            break
        tax += (bracket.up_to - previous_limit) * bracket.rate
        previous_limit = bracket.up_to

    return tax


def _annual_tax(taxable_income: Decimal, election: WithholdingElection, tables: WithholdingTables) -> Decimal:
    """Bracket tax for the election's filing status.

    With the Step 2 checkbox (multiple jobs) the single table is used
    regardless of filing status.
    """
    status = "single" if election.multiple_jobs else election.filing_status
    return bracket_tax(taxable_income, tables.brackets_for(status))


def _validate_election(election: WithholdingElection) -> None:
    if election.filing_status not in FILING_STATUSES:
        raise InvalidInputError(
            f"Invalid filing_status: {election.filing_status}. Must be one of {FILING_STATUSES}",
            field="filing_status",
        )


def compute_withholding(
    gross_pay: Number,
    pay_frequency: str,
    election: WithholdingElection,
    ytd_gross_wages_before: Number = 0,
    *,
    rates: TaxRateConfiguration,
    tables: WithholdingTables,
) -> FederalWithholdingResult:
    """Calculate federal withholding for one paycheck (IRS Pub 15-T percentage method).

    Args:
        gross_pay: Gross wages for this paycheck
        pay_frequency: 'weekly', 'biweekly', 'semimonthly' or 'monthly'
        election: Caregiver's W-4 elections
        ytd_gross_wages_before: YTD gross wages before this paycheck (SS cap, advisory)
        rates: Tax rate configuration for the paycheck's year
        tables: Withholding tables for the paycheck's year

    Returns:
        FederalWithholdingResult with breakdown and advisory FICA

    Raises:
        InvalidInputError: On negative gross/YTD or unknown frequency/filing status
        MissingConfigurationError: If tables lack the filing status
    """
    gross = to_decimal(gross_pay)
    ytd = to_decimal(ytd_gross_wages_before)
    if gross < 0:
        raise InvalidInputError(f"gross_pay must be non-negative, got {gross}", field="gross_pay")
    if ytd < 0:
        raise InvalidInputError(
            f"ytd_gross_wages_before must be non-negative, got {ytd}", field="ytd_gross_wages_before"
        )
    _validate_election(election)
    periods = periods_per_year(pay_frequency)

    # Step 1: Annualize wages
    annualized_wages = gross * periods

    # Step 2: Adjust for Step 4(a) other income, Step 3 dependents, Step 4(b) deductions
    adjusted_annual_wages = (
        annualized_wages
        + election.annual_other_income
        - election.annual_dependents_credit
        - election.annual_deductions
    )

    # Step 3: Apply standard deduction
    standard_deduction = tables.standard_deduction_for(election.filing_status)
    taxable_income = max(ZERO, adjusted_annual_wages - standard_deduction)

    # Step 4: Bracket tax (single table when Step 2 checkbox is set)
    annual_tax = _annual_tax(taxable_income, election, tables)

    # Step 5: De-annualize and add Step 4(c) extra withholding
    per_paycheck = annual_tax / periods + election.per_paycheck_extra_withholding

    # Step 6: Round to cents, never negative
    federal_withholding = round_cents(max(ZERO, per_paycheck))

    # Advisory FICA from the shared rate configuration
    ss_taxable = capped_taxable_wages(gross, ytd, rates.ss_wage_base)
    social_security = round_cents(ss_taxable * rates.ss_rate_employee)
    medicare = round_cents(gross * rates.medicare_rate_employee)

    logger.debug(
        f"withholding {pay_frequency} gross={gross} status={election.filing_status} "
        f"multiple_jobs={election.multiple_jobs} taxable={taxable_income} annual_tax={annual_tax:.2f} "
        f"-> {federal_withholding}"
    )

    return FederalWithholdingResult(
        gross_pay=gross,
        pay_frequency=pay_frequency,
        federal_withholding=federal_withholding,
        social_security=social_security,
        medicare=medicare,
        total_fica=social_security + medicare,
        breakdown=WithholdingBreakdown(
            annualized_wages=annualized_wages,
            adjusted_annual_wages=adjusted_annual_wages,
            standard_deduction=standard_deduction,
            taxable_income=taxable_income,
            annual_tax=round_cents(annual_tax),
            per_paycheck_tax=federal_withholding,
        ),
    )


def estimate_annual_tax(
    annual_gross_wages: Number,
    election: WithholdingElection,
    *,
    rates: TaxRateConfiguration,
    tables: WithholdingTables,
) -> AnnualTaxEstimate:
    """Estimate a full year's federal income tax and employee FICA.

    Informational only (e.g. for setting W-4 extra withholding). Uses the
    election's own filing status table; the multiple-jobs safe harbor is a
    withholding rule, not a liability rule.
    """
    _validate_election(election)
    gross = to_decimal(annual_gross_wages)
    if gross < 0:
        raise InvalidInputError(f"annual_gross_wages must be non-negative, got {gross}", field="annual_gross_wages")

    adjusted = gross + election.annual_other_income - election.annual_dependents_credit - election.annual_deductions
    standard_deduction = tables.standard_deduction_for(election.filing_status)
    taxable_income = max(ZERO, adjusted - standard_deduction)
    federal_income_tax = bracket_tax(taxable_income, tables.brackets_for(election.filing_status))

    social_security_tax = min(gross, rates.ss_wage_base) * rates.ss_rate_employee
    medicare_tax = gross * rates.medicare_rate_employee
    total_tax = federal_income_tax + social_security_tax + medicare_tax
    effective_rate = (total_tax / gross) if gross > 0 else ZERO

    return AnnualTaxEstimate(
        gross_wages=gross,
        standard_deduction=standard_deduction,
        taxable_income=taxable_income,
        federal_income_tax=round_cents(federal_income_tax),
        social_security_tax=round_cents(social_security_tax),
        medicare_tax=round_cents(medicare_tax),
        total_tax=round_cents(total_tax),
        effective_tax_rate=effective_rate.quantize(Decimal("0.0001")),
    )
