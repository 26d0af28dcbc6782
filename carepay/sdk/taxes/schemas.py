"""Pydantic schemas for tax rules, withholding elections and tax results.

These schemas validate the tax_rules/*.yaml files and provide typed access
to rates, wage bases, standard deductions and bracket tables.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors import MissingConfigurationError

FilingStatus = Literal["single", "married", "head_of_household"]
PayFrequency = Literal["weekly", "biweekly", "semimonthly", "monthly"]

FILING_STATUSES = ("single", "married", "head_of_household")


class TaxBracket(BaseModel):
    """Single marginal-rate bracket. up_to is None on the open-ended top bracket."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    up_to: Optional[Decimal] = Field(default=None, gt=0, description="Upper bound of taxable income")
    rate: Decimal = Field(..., ge=0, le=1, description="Marginal rate as decimal")


class WithholdingTables(BaseModel):
    """Annual standard deductions and bracket tables per filing status."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    standard_deduction: Dict[FilingStatus, Decimal]
    brackets: Dict[FilingStatus, List[TaxBracket]]

    @model_validator(mode="after")
    def check_brackets(self) -> "WithholdingTables":
        """Brackets must ascend and end with exactly one open-ended bracket."""
        for status, table in self.brackets.items():
            if not table:
                raise ValueError(f"brackets.{status} is empty")
            limits = [b.up_to for b in table[:-1]]
            if any(limit is None for limit in limits):
                raise ValueError(f"brackets.{status}: only the last bracket may omit up_to")
            if table[-1].up_to is not None:
                raise ValueError(f"brackets.{status}: last bracket must omit up_to")
            if limits != sorted(limits) or len(set(limits)) != len(limits):
                raise ValueError(f"brackets.{status}: up_to limits must strictly ascend")
        return self

    def brackets_for(self, filing_status: str) -> List[TaxBracket]:
        if filing_status not in self.brackets:
            raise MissingConfigurationError(
                f"No withholding brackets for filing status '{filing_status}'",
                {"filing_status": filing_status},
            )
        return self.brackets[filing_status]

    def standard_deduction_for(self, filing_status: str) -> Decimal:
        if filing_status not in self.standard_deduction:
            raise MissingConfigurationError(
                f"No standard deduction for filing status '{filing_status}'",
                {"filing_status": filing_status},
            )
        return self.standard_deduction[filing_status]


class TaxRateConfiguration(BaseModel):
    """Statutory payroll tax rates and wage bases for one year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=1900)
    version: str = Field(..., description="Tax version tag carried on results (e.g. '2026.1')")

    ss_rate_employee: Decimal = Field(..., ge=0, le=1)
    ss_rate_employer: Decimal = Field(..., ge=0, le=1)
    ss_wage_base: Decimal = Field(..., gt=0, description="Social Security wage base")
    medicare_rate_employee: Decimal = Field(..., ge=0, le=1)
    medicare_rate_employer: Decimal = Field(..., ge=0, le=1)
    state_disability_rate_employee: Decimal = Field(..., ge=0, le=1, description="Colorado FAMLI, employee share")
    state_disability_rate_employer: Decimal = Field(..., ge=0, le=1, description="Colorado FAMLI, employer share")
    state_unemployment_rate: Decimal = Field(..., ge=0, le=1, description="Colorado SUTA (employer)")
    state_unemployment_wage_base: Decimal = Field(..., gt=0)
    federal_unemployment_rate: Decimal = Field(..., ge=0, le=1, description="FUTA net rate (employer)")
    federal_unemployment_wage_base: Decimal = Field(..., gt=0)
    state_minimum_wage: Optional[Decimal] = Field(default=None, ge=0)


class TaxRules(BaseModel):
    """Complete tax rules for a year (one tax_rules/YYYY.yaml file)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    rates: TaxRateConfiguration
    federal_withholding: WithholdingTables

    @property
    def year(self) -> int:
        return self.rates.year


class WithholdingElection(BaseModel):
    """A caregiver's Form W-4 elections.

    Annual amounts: dependents credit (Step 3), other income (Step 4a),
    deductions (Step 4b). Extra withholding (Step 4c) is per paycheck.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    filing_status: FilingStatus = "single"
    multiple_jobs: bool = Field(default=False, description="Step 2 checkbox")
    annual_dependents_credit: Decimal = Field(default=Decimal("0"), ge=0)
    annual_other_income: Decimal = Field(default=Decimal("0"), ge=0)
    annual_deductions: Decimal = Field(default=Decimal("0"), ge=0)
    per_paycheck_extra_withholding: Decimal = Field(default=Decimal("0"), ge=0)
    effective_date: Optional[date] = None

    @classmethod
    def default(cls) -> "WithholdingElection":
        """Single filer, no adjustments - used when no W-4 is on file."""
        return cls()


class StatutoryTaxes(BaseModel):
    """FICA, Colorado FAMLI/SUTA and FUTA amounts for one paycheck."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    ss_employee: Decimal
    ss_employer: Decimal
    medicare_employee: Decimal
    medicare_employer: Decimal
    state_disability_employee: Decimal
    state_disability_employer: Decimal
    state_unemployment: Decimal
    federal_unemployment: Decimal
    total_employee_taxes: Decimal = Field(..., description="SS + Medicare + state disability, employee legs")
    total_employer_taxes: Decimal = Field(..., description="All employer legs incl. SUTA and FUTA")


class WithholdingBreakdown(BaseModel):
    """Percentage method intermediate values (annual unless noted)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    annualized_wages: Decimal
    adjusted_annual_wages: Decimal
    standard_deduction: Decimal
    taxable_income: Decimal
    annual_tax: Decimal
    per_paycheck_tax: Decimal


class FederalWithholdingResult(BaseModel):
    """Federal income tax withholding for one paycheck.

    social_security and medicare are advisory only: payroll deductions take
    FICA from the statutory tax computation, never from here.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_pay: Decimal
    pay_frequency: PayFrequency
    federal_withholding: Decimal
    social_security: Decimal
    medicare: Decimal
    total_fica: Decimal
    breakdown: WithholdingBreakdown


class AnnualTaxEstimate(BaseModel):
    """Estimated annual federal income tax and employee FICA."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_wages: Decimal
    standard_deduction: Decimal
    taxable_income: Decimal
    federal_income_tax: Decimal
    social_security_tax: Decimal
    medicare_tax: Decimal
    total_tax: Decimal
    effective_tax_rate: Decimal
