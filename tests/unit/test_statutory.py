"""Tests for statutory payroll taxes (FICA, Colorado FAMLI/SUTA, FUTA)."""

from decimal import Decimal

import pytest

from carepay.sdk.config import BUNDLED_TAX_RULES_DIR
from carepay.sdk.errors import InvalidInputError
from carepay.sdk.taxes import get_tax_configuration
from carepay.sdk.taxes.statutory import capped_taxable_wages, compute_statutory_taxes


@pytest.fixture
def config():
    return get_tax_configuration(2026, BUNDLED_TAX_RULES_DIR)


class TestCappedTaxableWages:
    @pytest.mark.parametrize("gross,ytd,base,expected", [
        ("200", "0", "1000", "200"),
        ("200", "950", "1000", "50"),
        ("200", "1000", "1000", "0"),
        ("200", "5000", "1000", "0"),
        ("0", "0", "1000", "0"),
    ])
    def test_cap(self, gross, ytd, base, expected):
        assert capped_taxable_wages(Decimal(gross), Decimal(ytd), Decimal(base)) == Decimal(expected)


class TestStatutoryTaxes:
    def test_uncapped_paycheck(self, config):
        taxes = compute_statutory_taxes(Decimal("1000"), 0, config)
        assert taxes.ss_employee == Decimal("62.00")
        assert taxes.ss_employer == Decimal("62.00")
        assert taxes.medicare_employee == Decimal("14.50")
        assert taxes.medicare_employer == Decimal("14.50")
        assert taxes.state_disability_employee == Decimal("4.40")
        assert taxes.state_disability_employer == Decimal("4.40")
        assert taxes.state_unemployment == Decimal("17.00")
        assert taxes.federal_unemployment == Decimal("6.00")
        assert taxes.total_employee_taxes == Decimal("80.90")
        assert taxes.total_employer_taxes == Decimal("103.90")

    def test_crossing_ss_wage_base(self, config):
        # 50 left under the 184,500 base
        taxes = compute_statutory_taxes(Decimal("200"), config.ss_wage_base - 50, config)
        assert taxes.ss_employee == Decimal("3.10")
        assert taxes.ss_employer == Decimal("3.10")
        assert taxes.medicare_employee == Decimal("2.90")

    def test_past_ss_wage_base(self, config):
        taxes = compute_statutory_taxes(Decimal("2000"), config.ss_wage_base, config)
        assert taxes.ss_employee == Decimal("0.00")
        assert taxes.ss_employer == Decimal("0.00")
        assert taxes.medicare_employee == Decimal("29.00")
        assert taxes.state_disability_employee == Decimal("8.80")

    def test_unemployment_caps_are_independent(self, config):
        # FUTA base 7,000 nearly used; SUTA base 30,600 still open
        taxes = compute_statutory_taxes(Decimal("1000"), Decimal("6500"), config)
        assert taxes.federal_unemployment == Decimal("3.00")   # 500 * 0.6%
        assert taxes.state_unemployment == Decimal("17.00")    # 1000 * 1.7%
        assert taxes.ss_employee == Decimal("62.00")

    def test_zero_gross(self, config):
        taxes = compute_statutory_taxes(0, 0, config)
        assert taxes.total_employee_taxes == Decimal("0.00")
        assert taxes.total_employer_taxes == Decimal("0.00")

    def test_rounding_half_up(self, config):
        # 12.50 * 6.2% = 0.775 -> 0.78
        taxes = compute_statutory_taxes(Decimal("12.50"), 0, config)
        assert taxes.ss_employee == Decimal("0.78")

    def test_negative_inputs_rejected(self, config):
        with pytest.raises(InvalidInputError):
            compute_statutory_taxes(Decimal("-1"), 0, config)
        with pytest.raises(InvalidInputError):
            compute_statutory_taxes(Decimal("100"), Decimal("-1"), config)
