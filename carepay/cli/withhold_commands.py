"""Federal withholding command."""

import json
from datetime import date

import click

from carepay.sdk import PayrollError, WithholdingElection, compute_withholding, load_tax_rules
from carepay.sdk.taxes.schemas import FILING_STATUSES
from carepay.sdk.taxes.withholding import PAY_PERIODS


@click.command("withhold")
@click.argument("gross", type=float)
@click.option("--frequency", type=click.Choice(list(PAY_PERIODS)), default="biweekly", help="Pay frequency")
@click.option("--filing-status", type=click.Choice(list(FILING_STATUSES)), default="single",
              help="W-4 Step 1(c) filing status")
@click.option("--multiple-jobs", is_flag=True, help="W-4 Step 2 checkbox")
@click.option("--dependents", type=float, default=0, help="W-4 Step 3 annual dependents credit")
@click.option("--other-income", type=float, default=0, help="W-4 Step 4(a) annual other income")
@click.option("--deductions", type=float, default=0, help="W-4 Step 4(b) annual deductions")
@click.option("--extra", type=float, default=0, help="W-4 Step 4(c) extra withholding per paycheck")
@click.option("--ytd", type=float, default=0, help="YTD gross wages before this paycheck")
@click.option("--year", type=int, help="Tax year (default: current year)")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format")
def withhold(gross, frequency, filing_status, multiple_jobs, dependents, other_income, deductions,
             extra, ytd, year, output_format):
    """Calculate federal withholding for one paycheck of GROSS wages.

    Uses the IRS Pub 15-T percentage method with the withholding tables
    for the tax year. Social Security and Medicare are shown for reference.

    \b
    Examples:
        carepay withhold 2000
        carepay withhold 1500 --filing-status married --frequency weekly
        carepay withhold 2000 --multiple-jobs --extra 25 --format json
    """
    try:
        election = WithholdingElection(
            filing_status=filing_status,
            multiple_jobs=multiple_jobs,
            annual_dependents_credit=dependents,
            annual_other_income=other_income,
            annual_deductions=deductions,
            per_paycheck_extra_withholding=extra,
        )
        rules = load_tax_rules(year or date.today().year)
        result = compute_withholding(
            gross, frequency, election, ytd, rates=rules.rates, tables=rules.federal_withholding
        )
    except (PayrollError, ValueError) as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    from rich.console import Console
    from .renderers.paycheck_renderer import render_withholding

    render_withholding(Console(), result)
