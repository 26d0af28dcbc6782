"""Rich renderers for paycheck and withholding results."""

from decimal import Decimal
from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from carepay.sdk.paycheck import PaycheckPreview
from carepay.sdk.taxes.schemas import FederalWithholdingResult, TaxRateConfiguration

CATEGORIES = ("regular", "weekend", "holiday", "overtime")


def _fmt(amount: Optional[Decimal]) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    return f"${amount:,.2f}"


def render_paycheck(console: Console, preview: PaycheckPreview) -> None:
    """Render a two-pass paycheck preview as Rich tables.

    Args:
        console: Rich Console instance
        preview: Output of preview_paycheck()
    """
    result = preview.result

    if not result.is_minimum_wage_compliant:
        console.print(Panel(
            "[yellow]Effective hourly rate is below the state minimum wage[/yellow]",
            title="Note",
            border_style="yellow",
        ))

    _render_sources(console, preview)

    table = Table(title=f"Paycheck: caregiver {result.caregiver_id} ({preview.tax_year})", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=28)
    table.add_column("Hours", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Amount", justify="right", min_width=12)

    table.add_row("[bold]EARNINGS[/bold]", "", "", "")
    for category in CATEGORIES:
        line = getattr(result.wages_by_type, category)
        if line.hours == 0 and category == "overtime":
            continue
        table.add_row(f"  {category.title()}", f"{line.hours:g}", _fmt(line.rate), _fmt(line.subtotal))
    table.add_row("  [bold]Gross Wages[/bold]", f"{result.total_hours:g}", "", f"[bold]{_fmt(result.gross_wages)}[/bold]")
    table.add_row("", "", "", "")

    taxes = result.taxes
    table.add_row("[bold]EMPLOYEE WITHHOLDING[/bold]", "", "", "")
    table.add_row("  Federal Income Tax", "", "", _fmt(result.federal_withholding))
    table.add_row("  Social Security", "", "", _fmt(taxes.ss_employee))
    table.add_row("  Medicare", "", "", _fmt(taxes.medicare_employee))
    table.add_row("  CO FAMLI", "", "", _fmt(taxes.state_disability_employee))
    table.add_row("  [dim]Total Withheld[/dim]", "", "", f"[dim]{_fmt(result.total_employee_withholdings)}[/dim]")
    table.add_row("", "", "", "")
    table.add_row("[bold green]NET PAY[/bold green]", "", "", f"[bold green]{_fmt(result.net_pay)}[/bold green]")
    table.add_row("", "", "", "")

    table.add_row("[bold]EMPLOYER TAXES[/bold]", "", "", "")
    table.add_row("  Social Security", "", "", _fmt(taxes.ss_employer))
    table.add_row("  Medicare", "", "", _fmt(taxes.medicare_employer))
    table.add_row("  CO FAMLI", "", "", _fmt(taxes.state_disability_employer))
    table.add_row("  CO SUTA", "", "", _fmt(taxes.state_unemployment))
    table.add_row("  FUTA", "", "", _fmt(taxes.federal_unemployment))
    table.add_row("  [dim]Total Employer[/dim]", "", "", f"[dim]{_fmt(taxes.total_employer_taxes)}[/dim]")

    console.print(table)


def _render_sources(console: Console, preview: PaycheckPreview) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    election = preview.election
    w4 = election.filing_status.replace("_", " ")
    if election.effective_date:
        w4 += f" (effective {election.effective_date})"
    if election.multiple_jobs:
        w4 += ", multiple jobs"

    table.add_row("W-4", w4 if preview.withholding else "[magenta]override[/magenta]")
    table.add_row("YTD before", _fmt(preview.ytd_wages_before))
    table.add_row("Versions", f"calc {preview.result.calculation_version}, tax {preview.result.tax_version}")

    console.print(Panel(table, title="Sources", border_style="dim"))


def render_withholding(console: Console, result: FederalWithholdingResult) -> None:
    """Render the percentage method breakdown for one paycheck."""
    b = result.breakdown
    table = Table(title=f"Federal Withholding ({result.pay_frequency})", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=28)
    table.add_column("Amount", justify="right", min_width=12)

    table.add_row("Gross Pay", _fmt(result.gross_pay))
    table.add_row("Annualized Wages", _fmt(b.annualized_wages))
    table.add_row("Adjusted Annual Wages", _fmt(b.adjusted_annual_wages))
    table.add_row("Standard Deduction", _fmt(b.standard_deduction))
    table.add_row("Taxable Income", _fmt(b.taxable_income))
    table.add_row("Annual Tax", _fmt(b.annual_tax))
    table.add_row("[bold]Federal Withholding[/bold]", f"[bold]{_fmt(result.federal_withholding)}[/bold]")
    table.add_row("", "")
    table.add_row("[dim]Social Security (advisory)[/dim]", f"[dim]{_fmt(result.social_security)}[/dim]")
    table.add_row("[dim]Medicare (advisory)[/dim]", f"[dim]{_fmt(result.medicare)}[/dim]")

    console.print(table)


def render_tax_configuration(console: Console, config: TaxRateConfiguration) -> None:
    """Render rates and wage bases for one year."""
    table = Table(title=f"Tax Configuration {config.year} ({config.version})", box=box.ROUNDED)
    table.add_column("Tax", style="bold")
    table.add_column("Employee", justify="right")
    table.add_column("Employer", justify="right")
    table.add_column("Wage Base", justify="right")

    def pct(rate: Decimal) -> str:
        return f"{rate * 100:.2f}%"

    table.add_row("Social Security", pct(config.ss_rate_employee), pct(config.ss_rate_employer), _fmt(config.ss_wage_base))
    table.add_row("Medicare", pct(config.medicare_rate_employee), pct(config.medicare_rate_employer), "none")
    table.add_row(
        "CO FAMLI", pct(config.state_disability_rate_employee), pct(config.state_disability_rate_employer), "none"
    )
    table.add_row("CO SUTA", "-", pct(config.state_unemployment_rate), _fmt(config.state_unemployment_wage_base))
    table.add_row("FUTA", "-", pct(config.federal_unemployment_rate), _fmt(config.federal_unemployment_wage_base))
    if config.state_minimum_wage is not None:
        table.add_row("CO Minimum Wage", "", "", _fmt(config.state_minimum_wage))

    console.print(table)
