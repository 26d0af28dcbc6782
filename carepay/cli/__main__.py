"""carepay CLI - Household caregiver payroll from the command line."""

import click

from carepay import __version__
from carepay.sdk import configure_logging

from .calc_commands import calc
from .calendar_commands import classify, holidays
from .config_commands import config, tax_config
from .withhold_commands import withhold


@click.group()
@click.version_option(version=__version__, prog_name="carepay")
def cli():
    """carepay - Household caregiver payroll and tax calculation.

    Computes gross wages with weekend/holiday premiums, federal income tax
    withholding (IRS Pub 15-T) and employee/employer payroll taxes.

    Configuration is loaded from (in order):

    \b
    1. CAREPAY_CONFIG_PATH environment variable
    2. ~/.config/carepay/ (XDG default)

    Set LOG_LEVEL=DEBUG to trace calculation steps.
    """
    pass


cli.add_command(calc)
cli.add_command(withhold)
cli.add_command(holidays)
cli.add_command(classify)
cli.add_command(tax_config)
cli.add_command(config)


def main():
    """Entry point for the CLI."""
    configure_logging()
    cli()


if __name__ == "__main__":
    main()
