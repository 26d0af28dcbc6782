"""carepay - Household caregiver payroll and tax calculation."""

__version__ = "0.3.0"
