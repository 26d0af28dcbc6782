"""carepay SDK - Household caregiver payroll and tax calculation."""

from .errors import (
    InvalidInputError,
    MissingConfigurationError,
    PayrollError,
)

from .config import (
    ProfileNotFoundError,
    configure_logging,
    get_caregiver_profile,
    get_config_dir,
    get_data_path,
    get_profile_path,
    get_setting,
    get_settings_path,
    get_tax_rules_dir,
    load_profile,
    load_settings,
    save_settings,
    set_setting,
)

from .day_types import (
    DayType,
    Holiday,
    classify,
    holiday_name,
    holidays_for_year,
    is_holiday,
    is_weekend,
)

from .schemas import (
    CategoryWages,
    HoursByType,
    PayrollCalculationInput,
    PayrollCalculationResult,
    WagesByType,
    WorkedHoursEntry,
)

from .wages import (
    MAX_DAILY_HOURS,
    WageAggregation,
    aggregate,
)

from .taxes import (
    FederalWithholdingResult,
    StatutoryTaxes,
    TaxRateConfiguration,
    TaxRules,
    WithholdingElection,
    bracket_tax,
    compute_statutory_taxes,
    compute_withholding,
    estimate_annual_tax,
    get_tax_configuration,
    load_tax_rules,
)

from .payroll import (
    CALCULATION_VERSION,
    calculate,
    calculate_batch,
)

from .paycheck import (
    PaycheckPreview,
    preview_paycheck,
)

__all__ = [
    # Errors
    "InvalidInputError",
    "MissingConfigurationError",
    "PayrollError",
    # Config
    "ProfileNotFoundError",
    "configure_logging",
    "get_caregiver_profile",
    "get_config_dir",
    "get_data_path",
    "get_profile_path",
    "get_setting",
    "get_settings_path",
    "get_tax_rules_dir",
    "load_profile",
    "load_settings",
    "save_settings",
    "set_setting",
    # Day types
    "DayType",
    "Holiday",
    "classify",
    "holiday_name",
    "holidays_for_year",
    "is_holiday",
    "is_weekend",
    # Schemas
    "CategoryWages",
    "HoursByType",
    "PayrollCalculationInput",
    "PayrollCalculationResult",
    "WagesByType",
    "WorkedHoursEntry",
    # Wages
    "MAX_DAILY_HOURS",
    "WageAggregation",
    "aggregate",
    # Taxes
    "FederalWithholdingResult",
    "StatutoryTaxes",
    "TaxRateConfiguration",
    "TaxRules",
    "WithholdingElection",
    "bracket_tax",
    "compute_statutory_taxes",
    "compute_withholding",
    "estimate_annual_tax",
    "get_tax_configuration",
    "load_tax_rules",
    # Payroll
    "CALCULATION_VERSION",
    "calculate",
    "calculate_batch",
    "PaycheckPreview",
    "preview_paycheck",
]
