"""Tax configuration and settings commands.

- tax-config: rates and wage bases resolved for a year
- config: machine-specific settings (settings.json)
"""

import json
from datetime import date

import click

from carepay.sdk import (
    PayrollError,
    get_config_dir,
    get_profile_path,
    get_settings_path,
    get_tax_configuration,
    get_tax_rules_dir,
    load_settings,
    set_setting,
)
from carepay.sdk.taxes.rules import get_available_years


@click.command("tax-config")
@click.argument("year", type=int, required=False)
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format")
def tax_config(year, output_format):
    """Show the tax rates and wage bases in effect for YEAR.

    Falls back to the most recent earlier year (or the most recent year
    available) when YEAR has no rules file.
    """
    year = year or date.today().year
    try:
        config = get_tax_configuration(year)
    except PayrollError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        data = config.model_dump(mode="json")
        data["requested_year"] = year
        click.echo(json.dumps(data, indent=2))
        return

    from rich.console import Console
    from .renderers.paycheck_renderer import render_tax_configuration

    if config.year != year:
        click.echo(f"No rules for {year}; showing {config.year}.", err=True)
    render_tax_configuration(Console(), config)


@click.group()
def config():
    """Manage machine-specific settings (settings.json).

    \b
    Settings:
      profile        path to profile.yaml (if not in the config directory)
      tax_rules_dir  directory of YYYY.yaml tax rules
      pay_frequency  default pay frequency for calc
    """
    pass


@config.command("path")
def config_path():
    """Show configuration paths."""
    click.echo(f"Config directory: {get_config_dir()}")
    click.echo(f"Settings:         {get_settings_path()}")
    click.echo(f"Profile:          {get_profile_path()}")
    years = ", ".join(str(y) for y in get_available_years()) or "none"
    click.echo(f"Tax rules:        {get_tax_rules_dir()} ({years})")


@config.command("show")
def config_show():
    """Show all settings."""
    settings = load_settings()
    if not settings:
        click.echo("No settings configured.")
        click.echo(f"Settings file: {get_settings_path()}")
        return
    click.echo(json.dumps(settings, indent=2))


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key, value):
    """Set a setting value."""
    settings_file = set_setting(key, value)
    click.echo(f"Set {key} = {value}")
    click.echo(f"Saved to: {settings_file}")
