"""Two-pass paycheck preview.

Federal withholding needs gross wages, and gross wages come from the payroll
calculation, so a paycheck takes two pure calls:

1. calculate() without federal withholding -> provisional gross wages
2. compute_withholding() on that gross
3. calculate() again with the withholding folded into a copy of the input

This module is the caller that sequences them; payroll.calculate() and
compute_withholding() stay stateless. External lookups (tax rules, YTD
wages, elections) are resolved here, once, before either pass.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional

from .money import ZERO, to_decimal
from .payroll import calculate
from .schemas import PayrollCalculationInput, PayrollCalculationResult
from .taxes.rules import load_tax_rules
from .taxes.schemas import FederalWithholdingResult, TaxRules, WithholdingElection
from .taxes.withholding import compute_withholding, periods_per_year
from .employee.ytd import YtdWagesLookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaycheckPreview:
    """Final payroll result plus the withholding pass that fed it.

    withholding is None when the input carried a federal withholding override.
    """
    result: PayrollCalculationResult
    withholding: Optional[FederalWithholdingResult]
    tax_year: int
    ytd_wages_before: Decimal
    election: WithholdingElection

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe dict (Decimals as strings)."""
        return {
            "tax_year": self.tax_year,
            "ytd_wages_before": str(self.ytd_wages_before),
            "election": self.election.model_dump(mode="json"),
            "withholding": self.withholding.model_dump(mode="json") if self.withholding else None,
            "result": self.result.model_dump(mode="json"),
        }


def preview_paycheck(
    payroll_input: PayrollCalculationInput,
    *,
    pay_frequency: str = "biweekly",
    election: Optional[WithholdingElection] = None,
    rules: Optional[TaxRules] = None,
    ytd_lookup: Optional[YtdWagesLookup] = None,
    today: Optional[date] = None,
) -> PaycheckPreview:
    """Calculate a paycheck including federal withholding.

    Args:
        payroll_input: Hours and rates; federal_withholding skips the withholding pass
        pay_frequency: Household pay frequency (annualization periods)
        election: Caregiver's W-4 elections (default election if None)
        rules: Tax rules to use (loaded for the tax year if None)
        ytd_lookup: (caregiver_id, year) -> YTD wages, used unless the input overrides YTD
        today: Date used for the tax year when the input has no pay_period_end

    Returns:
        PaycheckPreview

    Raises:
        InvalidInputError: On invalid hours, rates or pay frequency
        MissingConfigurationError: If no tax rules can be resolved
    """
    periods_per_year(pay_frequency)
    tax_year = payroll_input.tax_year or (today or date.today()).year
    rules = rules or load_tax_rules(tax_year)
    election = election or WithholdingElection.default()

    if payroll_input.ytd_wages_before is not None:
        ytd_before = payroll_input.ytd_wages_before
    elif ytd_lookup is not None:
        ytd_before = to_decimal(ytd_lookup(payroll_input.caregiver_id, tax_year))
    else:
        ytd_before = ZERO

    first_pass_input = payroll_input.model_copy(update={"ytd_wages_before": ytd_before})

    if payroll_input.federal_withholding is not None:
        logger.debug(f"caregiver {payroll_input.caregiver_id}: using federal withholding override")
        result = calculate(first_pass_input, rules.rates)
        return PaycheckPreview(
            result=result, withholding=None, tax_year=tax_year, ytd_wages_before=ytd_before, election=election
        )

    # Pass 1: provisional gross wages
    provisional = calculate(first_pass_input, rules.rates)

    withholding = compute_withholding(
        provisional.gross_wages,
        pay_frequency,
        election,
        ytd_before,
        rates=rules.rates,
        tables=rules.federal_withholding,
    )

    # Pass 2: same input with the withholding folded in
    final_input = first_pass_input.model_copy(update={"federal_withholding": withholding.federal_withholding})
    result = calculate(final_input, rules.rates)

    return PaycheckPreview(
        result=result, withholding=withholding, tax_year=tax_year, ytd_wages_before=ytd_before, election=election
    )
