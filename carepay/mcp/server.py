"""carepay MCP Server - FastMCP implementation for payroll tools."""

import json
import logging
from datetime import date
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from carepay.sdk import (
    PayrollCalculationInput,
    PayrollError,
    WithholdingElection,
    classify,
    compute_withholding,
    get_tax_configuration,
    holiday_name,
    load_tax_rules,
    preview_paycheck,
)
from carepay.sdk.day_types import parse_date
from carepay.sdk.taxes.rules import get_available_years

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("carepay")


def _error(e: Exception) -> dict[str, Any]:
    if isinstance(e, PayrollError):
        return e.to_dict()
    return {"error": str(e)}


# --- Tools ---

@mcp.tool()
async def calculate_paycheck(
    caregiver_id: str = Field(description="Caregiver identifier"),
    entries: list[dict[str, Any]] = Field(
        description="Worked hours: [{'date': 'YYYY-MM-DD', 'hours': 8, 'day_type': optional override}]"
    ),
    base_rate: float = Field(description="Base hourly rate in dollars"),
    holiday_multiplier: float = Field(default=2.0, description="Holiday premium multiplier"),
    weekend_multiplier: float = Field(default=1.5, description="Weekend premium multiplier"),
    pay_frequency: str = Field(default="biweekly", description="weekly, biweekly, semimonthly or monthly"),
    filing_status: str = Field(default="single", description="W-4 filing status: single, married, head_of_household"),
    multiple_jobs: bool = Field(default=False, description="W-4 Step 2 checkbox"),
    extra_withholding: float = Field(default=0, description="W-4 Step 4(c) extra withholding per paycheck"),
    ytd_wages_before: float = Field(default=0, description="YTD gross wages before this paycheck"),
    pay_period_end: str | None = Field(default=None, description="Pay period end (YYYY-MM-DD), selects the tax year"),
    federal_withholding: float | None = Field(
        default=None, description="Federal withholding override; skips the W-4 calculation"
    ),
) -> dict[str, Any]:
    """Calculate a caregiver paycheck: gross wages by day type, federal withholding, payroll taxes and net pay."""
    try:
        payroll_input = PayrollCalculationInput(
            caregiver_id=caregiver_id,
            entries=entries,
            base_rate=base_rate,
            holiday_multiplier=holiday_multiplier,
            weekend_multiplier=weekend_multiplier,
            ytd_wages_before=ytd_wages_before,
            pay_period_end=pay_period_end,
            federal_withholding=federal_withholding,
        )
        election = WithholdingElection(
            filing_status=filing_status,
            multiple_jobs=multiple_jobs,
            per_paycheck_extra_withholding=extra_withholding,
        )
        preview = preview_paycheck(payroll_input, pay_frequency=pay_frequency, election=election)
        return preview.to_dict()
    except (PayrollError, ValueError) as e:
        return _error(e)


@mcp.tool()
async def federal_withholding(
    gross_pay: float = Field(description="Gross wages for the paycheck"),
    pay_frequency: str = Field(default="biweekly", description="weekly, biweekly, semimonthly or monthly"),
    filing_status: str = Field(default="single", description="W-4 filing status: single, married, head_of_household"),
    multiple_jobs: bool = Field(default=False, description="W-4 Step 2 checkbox"),
    dependents_credit: float = Field(default=0, description="W-4 Step 3 annual dependents credit"),
    other_income: float = Field(default=0, description="W-4 Step 4(a) annual other income"),
    deductions: float = Field(default=0, description="W-4 Step 4(b) annual deductions"),
    extra_withholding: float = Field(default=0, description="W-4 Step 4(c) extra withholding per paycheck"),
    ytd_wages_before: float = Field(default=0, description="YTD gross wages before this paycheck"),
    year: int | None = Field(default=None, description="Tax year (default: current year)"),
) -> dict[str, Any]:
    """Federal income tax withholding for one paycheck (IRS Pub 15-T percentage method), with step breakdown."""
    try:
        election = WithholdingElection(
            filing_status=filing_status,
            multiple_jobs=multiple_jobs,
            annual_dependents_credit=dependents_credit,
            annual_other_income=other_income,
            annual_deductions=deductions,
            per_paycheck_extra_withholding=extra_withholding,
        )
        rules = load_tax_rules(year or date.today().year)
        result = compute_withholding(
            gross_pay, pay_frequency, election, ytd_wages_before,
            rates=rules.rates, tables=rules.federal_withholding,
        )
        return result.model_dump(mode="json")
    except (PayrollError, ValueError) as e:
        return _error(e)


@mcp.tool()
async def classify_dates(
    dates: list[str] = Field(description="Dates to classify (YYYY-MM-DD)"),
) -> dict[str, Any]:
    """Classify dates as regular, weekend or holiday (holiday wins over weekend)."""
    try:
        days = [parse_date(d) for d in dates]
        return {
            "dates": [
                {"date": day.isoformat(), "day_type": classify(day), "holiday": holiday_name(day)}
                for day in days
            ]
        }
    except ValueError as e:
        return _error(e)


@mcp.tool()
async def tax_configuration(
    year: int = Field(description="Tax year (falls back to the most recent earlier year)"),
) -> dict[str, Any]:
    """Payroll tax rates and wage bases in effect for a year."""
    try:
        return get_tax_configuration(year).model_dump(mode="json")
    except PayrollError as e:
        return _error(e)


# --- Resources ---

@mcp.resource("carepay://tax-rules/years")
async def list_tax_years_resource() -> str:
    """List years with tax rules available."""
    return json.dumps({"years": get_available_years()}, indent=2)


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
