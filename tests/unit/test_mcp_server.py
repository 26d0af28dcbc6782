"""Tests for the MCP tools (skipped without the mcp extra)."""

import asyncio

import pytest

pytest.importorskip("mcp")

from carepay.mcp import server  # noqa: E402
from carepay.sdk.config import BUNDLED_TAX_RULES_DIR  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("CAREPAY_CONFIG_PATH", str(tmp_path / "config"))
    monkeypatch.setenv("CAREPAY_TAX_RULES_DIR", str(BUNDLED_TAX_RULES_DIR))


def test_classify_dates():
    result = asyncio.run(server.classify_dates(dates=["2026-07-04", "2026-03-02"]))
    assert result["dates"][0] == {"date": "2026-07-04", "day_type": "holiday", "holiday": "Independence Day"}
    assert result["dates"][1]["day_type"] == "regular"


def test_classify_dates_error():
    result = asyncio.run(server.classify_dates(dates=["not-a-date"]))
    assert "error" in result


def test_tax_configuration():
    result = asyncio.run(server.tax_configuration(year=2026))
    assert result["version"] == "2026.1"


def test_calculate_paycheck():
    result = asyncio.run(server.calculate_paycheck(
        caregiver_id="1",
        entries=[{"date": "2026-03-02", "hours": 8}, {"date": "2026-07-04", "hours": 6}],
        base_rate=20,
        holiday_multiplier=2.0,
        weekend_multiplier=1.5,
        pay_frequency="biweekly",
        filing_status="single",
        multiple_jobs=False,
        extra_withholding=0,
        ytd_wages_before=0,
        pay_period_end="2026-07-10",
        federal_withholding=None,
    ))
    assert result["result"]["gross_wages"] == "400.00"
    assert result["result"]["federal_withholding"] == "0.00"


def test_federal_withholding_invalid_frequency():
    result = asyncio.run(server.federal_withholding(
        gross_pay=2000,
        pay_frequency="daily",
        filing_status="single",
        multiple_jobs=False,
        dependents_credit=0,
        other_income=0,
        deductions=0,
        extra_withholding=0,
        ytd_wages_before=0,
        year=2026,
    ))
    assert result["error"] == "InvalidInputError"
    assert result["context"]["field"] == "pay_frequency"
