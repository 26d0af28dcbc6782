"""Tests for tax rules loading and year fallback.

Uses tmp_path rules directories so the fallback chain can be exercised
with arbitrary years.
"""

import shutil

import pytest
import yaml

from carepay.sdk.config import BUNDLED_TAX_RULES_DIR
from carepay.sdk.errors import MissingConfigurationError
from carepay.sdk.taxes.rules import (
    clear_cache,
    get_available_years,
    get_tax_configuration,
    load_tax_rules,
    resolve_tax_rules,
    select_year,
)


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def rules_dir(tmp_path):
    """Rules for 2025 and 2026 copied from the bundled set."""
    for year in (2025, 2026):
        shutil.copy(BUNDLED_TAX_RULES_DIR / f"{year}.yaml", tmp_path / f"{year}.yaml")
    return tmp_path


class TestBundledRules:
    def test_bundled_years(self):
        years = get_available_years(BUNDLED_TAX_RULES_DIR)
        assert 2025 in years and 2026 in years
        assert years == sorted(years, reverse=True)

    @pytest.mark.parametrize("year", [2025, 2026])
    def test_bundled_rules_valid(self, year):
        rules = load_tax_rules(year, BUNDLED_TAX_RULES_DIR)
        assert rules.year == year
        for status in ("single", "married", "head_of_household"):
            assert rules.federal_withholding.brackets_for(status)[-1].up_to is None
            assert rules.federal_withholding.standard_deduction_for(status) > 0


class TestSelectYear:
    def test_exact_year(self):
        assert select_year([2024, 2025, 2026], 2025) == 2025

    def test_most_recent_prior_year(self):
        assert select_year([2023, 2025], 2024) == 2023
        assert select_year([2024, 2025], 2030) == 2025

    def test_most_recent_overall_when_all_later(self):
        assert select_year([2025, 2026], 2020) == 2026

    def test_no_years(self):
        with pytest.raises(MissingConfigurationError):
            select_year([], 2026)

    def test_resolve_in_memory(self, rules_dir):
        available = {y: load_tax_rules(y, rules_dir) for y in (2025, 2026)}
        assert resolve_tax_rules(available, 2027).year == 2026


class TestLoadTaxRules:
    def test_exact(self, rules_dir):
        assert load_tax_rules(2025, rules_dir).rates.version == "2025.2"

    def test_fallback_to_prior_year(self, rules_dir):
        rules = load_tax_rules(2028, rules_dir)
        assert rules.year == 2026

    def test_fallback_to_most_recent(self, rules_dir):
        assert load_tax_rules(2019, rules_dir).year == 2026

    def test_empty_directory(self, tmp_path):
        with pytest.raises(MissingConfigurationError):
            load_tax_rules(2026, tmp_path)

    def test_invalid_rules_file(self, tmp_path):
        data = yaml.safe_load((BUNDLED_TAX_RULES_DIR / "2026.yaml").read_text())
        data["rates"]["ss_rate_employee"] = 1.5
        (tmp_path / "2026.yaml").write_text(yaml.safe_dump(data))
        with pytest.raises(MissingConfigurationError):
            load_tax_rules(2026, tmp_path)

    def test_unparseable_rules_file(self, tmp_path):
        (tmp_path / "2026.yaml").write_text("rates: [unclosed\n  year: 2026\n")
        with pytest.raises(MissingConfigurationError) as exc_info:
            load_tax_rules(2026, tmp_path)
        assert exc_info.value.context["path"].endswith("2026.yaml")

    def test_year_mismatch(self, tmp_path):
        shutil.copy(BUNDLED_TAX_RULES_DIR / "2025.yaml", tmp_path / "2026.yaml")
        with pytest.raises(MissingConfigurationError):
            load_tax_rules(2026, tmp_path)

    def test_env_var_rules_dir(self, rules_dir, monkeypatch):
        (rules_dir / "2025.yaml").unlink()
        monkeypatch.setenv("CAREPAY_TAX_RULES_DIR", str(rules_dir))
        assert get_tax_configuration(2025).year == 2026
