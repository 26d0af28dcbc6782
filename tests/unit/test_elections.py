"""Tests for withholding election (W-4) resolution from profile.yaml."""

from datetime import date
from decimal import Decimal

import pytest
import yaml

from carepay.sdk.config import get_caregiver_profile
from carepay.sdk.employee import election_from_config, elections_for_caregiver, resolve_election
from carepay.sdk.errors import InvalidInputError
from carepay.sdk.taxes import WithholdingElection


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Isolated config directory with a profile for caregiver '1'."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("CAREPAY_CONFIG_PATH", str(config_dir))

    profile = {
        "caregivers": {
            "1": {
                "name": "Maria",
                "base_rate": 22.50,
                "elections": [
                    {"filing_status": "single", "effective": "2025-01-01"},
                    {"filing_status": "mfj", "step4c_extra_withholding": 20, "effective": "2026-04-01"},
                ],
            },
        },
    }
    (config_dir / "profile.yaml").write_text(yaml.safe_dump(profile))
    return config_dir


class TestElectionFromConfig:
    def test_shorthand_keys(self):
        election = election_from_config({
            "filing_status": "hoh",
            "multiple_jobs": True,
            "dependents": 2000,
            "other_income": 1500,
            "deductions": 500,
            "extra_withholding": 12.5,
            "effective": "2026-01-01",
        })
        assert election.filing_status == "head_of_household"
        assert election.multiple_jobs
        assert election.annual_dependents_credit == Decimal("2000")
        assert election.annual_other_income == Decimal("1500")
        assert election.annual_deductions == Decimal("500")
        assert election.per_paycheck_extra_withholding == Decimal("12.5")
        assert election.effective_date == date(2026, 1, 1)

    def test_w4_step_keys(self):
        election = election_from_config({"step2_checkbox": True, "step3_dependents": 4000})
        assert election.multiple_jobs
        assert election.annual_dependents_credit == Decimal("4000")

    def test_invalid_values(self):
        with pytest.raises(InvalidInputError):
            election_from_config({"filing_status": "widowed"})
        with pytest.raises(InvalidInputError):
            election_from_config({"extra_withholding": -5})

    def test_unknown_key_rejected(self):
        with pytest.raises(InvalidInputError):
            election_from_config({"allowances": 3})


class TestResolveElection:
    def test_newest_effective_on_or_before_date(self):
        old = WithholdingElection(effective_date=date(2025, 1, 1))
        new = WithholdingElection(filing_status="married", effective_date=date(2026, 4, 1))
        assert resolve_election([old, new], "2026-03-31") == old
        assert resolve_election([old, new], "2026-04-01") == new
        assert resolve_election([new, old], "2026-12-31") == new

    def test_later_registration_wins_on_same_date(self):
        first = WithholdingElection(effective_date=date(2026, 1, 1))
        second = WithholdingElection(filing_status="married", effective_date=date(2026, 1, 1))
        assert resolve_election([first, second], "2026-02-01") == second

    def test_undated_election_always_applies(self):
        undated = WithholdingElection(filing_status="head_of_household")
        assert resolve_election([undated], "1999-01-01") == undated

    def test_default_when_none_effective(self):
        future = WithholdingElection(filing_status="married", effective_date=date(2027, 1, 1))
        assert resolve_election([future], "2026-06-01") == WithholdingElection.default()
        assert resolve_election([], "2026-06-01") == WithholdingElection.default()


class TestElectionsForCaregiver:
    def test_from_profile(self, isolated_env):
        elections = elections_for_caregiver("1")
        assert len(elections) == 2
        current = resolve_election(elections, date(2026, 5, 1))
        assert current.filing_status == "married"
        assert current.per_paycheck_extra_withholding == Decimal("20")

    def test_unknown_caregiver(self, isolated_env):
        assert elections_for_caregiver("99") == []

    def test_no_profile(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CAREPAY_CONFIG_PATH", str(tmp_path / "empty"))
        assert elections_for_caregiver("1") == []


class TestCaregiverProfile:
    def test_unquoted_integer_key(self):
        profile = yaml.safe_load(
            "caregivers:\n"
            "  1:\n"
            "    base_rate: 25\n"
            "    elections:\n"
            "      - filing_status: mfj\n"
        )
        assert get_caregiver_profile("1", profile)["base_rate"] == 25
        assert get_caregiver_profile(1, profile)["base_rate"] == 25
        assert elections_for_caregiver("1", profile)[0].filing_status == "married"

    def test_string_key(self, isolated_env):
        assert get_caregiver_profile("1")["base_rate"] == 22.50
        assert get_caregiver_profile("2") == {}
