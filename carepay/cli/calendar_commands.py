"""Holiday calendar and day classification commands."""

import json

import click

from carepay.sdk import classify as classify_date
from carepay.sdk import holiday_name, holidays_for_year
from carepay.sdk.day_types import parse_date


@click.command("holidays")
@click.argument("year", type=int)
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format")
def holidays(year, output_format):
    """List the premium-pay holidays for YEAR."""
    items = holidays_for_year(year)

    if output_format == "json":
        data = [{"date": h.date.isoformat(), "name": h.name} for h in items]
        click.echo(json.dumps(data, indent=2))
        return

    for h in items:
        click.echo(f"{h.date.isoformat()}  {h.date.strftime('%a')}  {h.name}")


@click.command("classify")
@click.argument("dates", nargs=-1, required=True)
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format")
def classify(dates, output_format):
    """Classify DATES (YYYY-MM-DD) as regular, weekend or holiday.

    Holidays take precedence over weekends.
    """
    rows = []
    for value in dates:
        try:
            day = parse_date(value)
        except ValueError:
            raise click.BadParameter(f"Invalid date '{value}'. Use YYYY-MM-DD.")
        rows.append({
            "date": day.isoformat(),
            "day_type": classify_date(day),
            "holiday": holiday_name(day),
        })

    if output_format == "json":
        click.echo(json.dumps(rows, indent=2))
        return

    for row in rows:
        suffix = f"  ({row['holiday']})" if row["holiday"] else ""
        click.echo(f"{row['date']}  {row['day_type']}{suffix}")
