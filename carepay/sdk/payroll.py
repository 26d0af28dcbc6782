"""Payroll calculation for household caregivers.

Composes wage aggregation and statutory taxes into one paycheck result:

1. Aggregate worked hours into wages by day type
2. Statutory taxes on gross wages, capped against YTD wages before the check
3. Fold in the federal withholding computed by the caller in a prior pass
4. Net pay = gross - (federal + SS + Medicare + state disability)

Federal withholding depends on gross wages this module produces, so callers
run two passes (see paycheck.preview_paycheck). Nothing here is stateful:
identical input and configuration always give an identical result.
"""

import logging
from decimal import Decimal
from typing import List

from .errors import InvalidInputError
from .money import ZERO, round_cents
from .schemas import PayrollCalculationInput, PayrollCalculationResult
from .taxes.schemas import TaxRateConfiguration
from .taxes.statutory import compute_statutory_taxes
from .wages import aggregate

logger = logging.getLogger(__name__)

CALCULATION_VERSION = "v2.1-household"


def _validate_overrides(payroll_input: PayrollCalculationInput) -> None:
    for field in ("federal_withholding", "ytd_wages_before"):
        value = getattr(payroll_input, field)
        if value is not None and value < 0:
            raise InvalidInputError(f"{field} must be non-negative, got {value}", field=field)


def _is_minimum_wage_compliant(
    gross_wages: Decimal, total_hours: Decimal, base_rate: Decimal, config: TaxRateConfiguration
) -> bool:
    if config.state_minimum_wage is None:
        return True
    effective_rate = gross_wages / total_hours if total_hours > 0 else base_rate
    return effective_rate >= config.state_minimum_wage


def calculate(payroll_input: PayrollCalculationInput, config: TaxRateConfiguration) -> PayrollCalculationResult:
    """Calculate one caregiver's paycheck.

    Args:
        payroll_input: Hours, rates and optional withholding/YTD overrides
        config: Tax rate configuration for the paycheck's year

    Returns:
        PayrollCalculationResult

    Raises:
        InvalidInputError: On negative hours/rates/overrides or >24 hours on a date
    """
    _validate_overrides(payroll_input)

    wages = aggregate(
        payroll_input.entries,
        payroll_input.base_rate,
        payroll_input.holiday_multiplier,
        payroll_input.weekend_multiplier,
        overtime_enabled=payroll_input.overtime_enabled,
        overtime_multiplier=payroll_input.overtime_multiplier,
    )

    ytd_before = payroll_input.ytd_wages_before if payroll_input.ytd_wages_before is not None else ZERO
    taxes = compute_statutory_taxes(wages.gross_wages, ytd_before, config)

    federal_withholding = round_cents(payroll_input.federal_withholding or ZERO)
    total_employee_withholdings = (
        federal_withholding + taxes.ss_employee + taxes.medicare_employee + taxes.state_disability_employee
    )
    net_pay = round_cents(wages.gross_wages - total_employee_withholdings)

    compliant = _is_minimum_wage_compliant(wages.gross_wages, wages.total_hours, payroll_input.base_rate, config)
    if not compliant:
        logger.warning(
            f"caregiver {payroll_input.caregiver_id}: effective rate below "
            f"state minimum wage {config.state_minimum_wage}"
        )

    logger.info(
        f"caregiver {payroll_input.caregiver_id}: {wages.total_hours}h gross={wages.gross_wages} "
        f"withheld={total_employee_withholdings} net={net_pay} (tax {config.version})"
    )

    return PayrollCalculationResult(
        caregiver_id=payroll_input.caregiver_id,
        total_hours=wages.total_hours,
        hours_by_type=wages.hours_by_type,
        wages_by_type=wages.wages_by_type,
        gross_wages=wages.gross_wages,
        taxes=taxes,
        federal_withholding=federal_withholding,
        total_employee_withholdings=total_employee_withholdings,
        net_pay=net_pay,
        calculation_version=CALCULATION_VERSION,
        tax_version=config.version,
        is_minimum_wage_compliant=compliant,
    )


def calculate_batch(
    inputs: List[PayrollCalculationInput], config: TaxRateConfiguration
) -> List[PayrollCalculationResult]:
    """Calculate paychecks for several caregivers, each independently.

    Results are in input order. The first invalid input raises; no partial
    list is returned.
    """
    return [calculate(payroll_input, config) for payroll_input in inputs]
