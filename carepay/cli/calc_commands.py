"""Paycheck calculation command."""

import json
from datetime import date
from pathlib import Path
from typing import Any

import click
import yaml

from carepay.sdk import (
    PayrollCalculationInput,
    PayrollError,
    ProfileNotFoundError,
    get_caregiver_profile,
    get_setting,
    load_profile,
    preview_paycheck,
)
from carepay.sdk.day_types import parse_date
from carepay.sdk.employee import (
    elections_for_caregiver,
    load_payroll_records,
    make_ytd_lookup,
    resolve_election,
)
from carepay.sdk.taxes.withholding import PAY_PERIODS


def load_hours_file(path: Path) -> dict:
    """Load a YAML or JSON hours file.

    Either a bare list of {date, hours, day_type?} entries, or a mapping with
    an 'entries' list plus optional caregiver_id and pay_period_end.
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {"entries": []}
    if isinstance(data, list):
        return {"entries": data}
    if isinstance(data, dict) and isinstance(data.get("entries", []), list):
        return data
    raise ValueError(f"Hours file must be a list of entries or a mapping with 'entries': {path}")


def _pick(*values: Any) -> Any:
    """First value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


@click.command("calc")
@click.argument("hours_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--rate", type=float, help="Base hourly rate (default: caregiver base_rate from profile)")
@click.option("--holiday-multiplier", type=float, help="Holiday premium multiplier (default 2.0)")
@click.option("--weekend-multiplier", type=float, help="Weekend premium multiplier (default 1.5)")
@click.option("--caregiver", "caregiver_id", help="Caregiver ID in profile.yaml (rates, W-4 elections)")
@click.option("--frequency", type=click.Choice(list(PAY_PERIODS)), help="Pay frequency (default: settings or biweekly)")
@click.option("--ytd", type=float, help="YTD gross wages before this paycheck (default: from payroll records)")
@click.option("--withholding", type=float, help="Federal withholding override (skips the W-4 calculation)")
@click.option("--period-end", help="Pay period end date YYYY-MM-DD (selects the tax year)")
@click.option("--overtime", is_flag=True, help="Apply daily/weekly overtime rules (or set overtime: true in profile)")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format")
def calc(hours_file, rate, holiday_multiplier, weekend_multiplier, caregiver_id, frequency,
         ytd, withholding, period_end, overtime, output_format):
    """Calculate a paycheck from worked hours.

    HOURS_FILE is YAML or JSON, a list of entries:

    \b
        - date: 2026-03-02
          hours: 8
        - date: 2026-03-07
          hours: 6
          day_type: weekend   # optional override

    Runs both passes: gross wages first, then federal withholding from the
    caregiver's W-4 election, then the final paycheck with that withholding.
    """
    try:
        hours = load_hours_file(hours_file)
        caregiver_id = _pick(caregiver_id, hours.get("caregiver_id"))
        profile = load_profile(require_exists=False)
        caregiver = get_caregiver_profile(caregiver_id, profile) if caregiver_id is not None else {}

        base_rate = _pick(rate, caregiver.get("base_rate"))
        if base_rate is None:
            raise click.UsageError("No base rate: pass --rate or set base_rate for the caregiver in profile.yaml")

        period_end = _pick(period_end, hours.get("pay_period_end"))
        period_end = parse_date(period_end) if period_end is not None else None

        fields = {
            "caregiver_id": caregiver_id if caregiver_id is not None else "default",
            "entries": hours["entries"],
            "base_rate": base_rate,
            "holiday_multiplier": _pick(holiday_multiplier, caregiver.get("holiday_multiplier")),
            "weekend_multiplier": _pick(weekend_multiplier, caregiver.get("weekend_multiplier")),
            "overtime_enabled": overtime or bool(caregiver.get("overtime")),
            "federal_withholding": withholding,
            "ytd_wages_before": ytd,
            "pay_period_end": period_end,
        }
        payroll_input = PayrollCalculationInput.model_validate(
            {k: v for k, v in fields.items() if v is not None}
        )

        election = None
        if caregiver_id is not None:
            elections = elections_for_caregiver(caregiver_id, profile)
            if elections:
                election = resolve_election(elections, period_end or date.today())

        ytd_lookup = None
        if ytd is None:
            ytd_lookup = make_ytd_lookup(load_payroll_records(), before=period_end)

        preview = preview_paycheck(
            payroll_input,
            pay_frequency=frequency or get_setting("pay_frequency", "biweekly"),
            election=election,
            ytd_lookup=ytd_lookup,
        )
    except (PayrollError, ProfileNotFoundError, ValueError, yaml.YAMLError) as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(preview.to_dict(), indent=2))
        return

    from rich.console import Console
    from .renderers.paycheck_renderer import render_paycheck

    render_paycheck(Console(), preview)
