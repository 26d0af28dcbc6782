"""Tests for YTD wage lookup from payroll records."""

import json
from decimal import Decimal

import pytest

from carepay.sdk.employee import load_payroll_records, make_ytd_lookup, ytd_gross_wages


def record(caregiver_id, period_end, gross, finalized=True, voided=False):
    return {
        "caregiver_id": caregiver_id,
        "pay_period_end": period_end,
        "gross_wages": gross,
        "is_finalized": finalized,
        "is_voided": voided,
    }


@pytest.fixture
def records():
    return [
        record("1", "2025-12-26", 1000.00),        # prior year
        record("1", "2026-01-09", 1200.00),
        record("1", "2026-01-23", 1250.50),
        record("1", "2026-02-06", 900.00, finalized=False),   # draft
        record("1", "2026-02-06", 1100.00, voided=True),
        record("2", "2026-01-09", 800.00),         # other caregiver
        record(1, "2026-02-20", 300.25),           # numeric id
    ]


class TestYtdGrossWages:
    def test_finalized_non_voided_in_year(self, records):
        assert ytd_gross_wages(records, "1", 2026) == Decimal("2750.75")

    def test_before_cutoff_is_exclusive(self, records):
        assert ytd_gross_wages(records, "1", 2026, before="2026-01-23") == Decimal("1200.00")

    def test_other_caregiver_and_year(self, records):
        assert ytd_gross_wages(records, "2", 2026) == Decimal("800.00")
        assert ytd_gross_wages(records, "1", 2025) == Decimal("1000.00")
        assert ytd_gross_wages(records, "3", 2026) == Decimal("0.00")

    def test_lookup(self, records):
        lookup = make_ytd_lookup(records, before="2026-02-01")
        assert lookup("1", 2026) == Decimal("2450.50")


class TestLoadPayrollRecords:
    def test_missing_file(self, tmp_path):
        assert load_payroll_records(tmp_path / "payroll_records.json") == []

    def test_default_path_under_data_dir(self, tmp_path, monkeypatch, records):
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        (tmp_path / "carepay").mkdir()
        (tmp_path / "carepay" / "payroll_records.json").write_text(json.dumps(records))
        assert len(load_payroll_records()) == len(records)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "payroll_records.json"
        path.write_text(json.dumps({"records": []}))
        with pytest.raises(ValueError):
            load_payroll_records(path)
