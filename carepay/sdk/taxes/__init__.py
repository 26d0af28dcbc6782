"""taxes - Tax calculation and withholding logic.

Scope:
- Federal income tax withholding (IRS Pub 15-T percentage method)
- Statutory payroll taxes: SS, Medicare, Colorado FAMLI and SUTA, FUTA
- Wage-base caps tracked against YTD wages before the paycheck
- Year-specific rules loaded from tax_rules/{year}.yaml

Constraints:
- Pure calculation - no caregiver-specific config (that's in employee/)
- No records access - receives data, returns results

Usage:
    from carepay.sdk.taxes import compute_withholding, compute_statutory_taxes, load_tax_rules

    rules = load_tax_rules(2026)
    taxes = compute_statutory_taxes(gross, ytd_before, rules.rates)
"""

from .schemas import (
    AnnualTaxEstimate,
    FederalWithholdingResult,
    FilingStatus,
    PayFrequency,
    StatutoryTaxes,
    TaxBracket,
    TaxRateConfiguration,
    TaxRules,
    WithholdingBreakdown,
    WithholdingElection,
    WithholdingTables,
)

from .statutory import (
    capped_taxable_wages,
    compute_statutory_taxes,
)

from .withholding import (
    PAY_PERIODS,
    bracket_tax,
    compute_withholding,
    estimate_annual_tax,
    periods_per_year,
)

from .rules import (
    get_available_years,
    get_tax_configuration,
    load_tax_rules,
    resolve_tax_rules,
    select_year,
)

__all__ = [
    # Schemas
    "AnnualTaxEstimate",
    "FederalWithholdingResult",
    "FilingStatus",
    "PayFrequency",
    "StatutoryTaxes",
    "TaxBracket",
    "TaxRateConfiguration",
    "TaxRules",
    "WithholdingBreakdown",
    "WithholdingElection",
    "WithholdingTables",
    # Statutory
    "capped_taxable_wages",
    "compute_statutory_taxes",
    # Withholding
    "PAY_PERIODS",
    "bracket_tax",
    "compute_withholding",
    "estimate_annual_tax",
    "periods_per_year",
    # Rules
    "get_available_years",
    "get_tax_configuration",
    "load_tax_rules",
    "resolve_tax_rules",
    "select_year",
]
