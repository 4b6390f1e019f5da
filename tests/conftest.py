from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Callable

import pandas as pd
import pytest

from payroll_cohorts.config import Settings
from payroll_cohorts.models import PayrollRecord


@pytest.fixture
def make_raw_row() -> Callable[..., dict[str, str]]:
    """Factory for one raw source row (all text, source column names)."""

    def _make(**overrides: str) -> dict[str, str]:
        row = {
            "taxid": "1001",
            "command": "075 PRECINCT",
            "rank": "POLICE OFFICER",
            "appt_date": "7/1/2010",
            "assignment_date": "1/15/2015",
            "Fiscal Year": "2021",
            "Leave Status as of June 30": "ACTIVE",
            "Base Salary": "85292.00",
            "Regular Hours": "2080",
            "Regular Gross Paid": "84000.50",
            "OT Hours": "300.25",
            "Total OT Paid": "20000",
            "Total Other Pay": "5000",
        }
        row.update(overrides)
        return row

    return _make


@pytest.fixture
def make_table(make_raw_row: Callable[..., dict[str, str]]) -> Callable[..., pd.DataFrame]:
    """Factory for a raw source table from row overrides."""

    def _make(*rows: dict[str, str]) -> pd.DataFrame:
        return pd.DataFrame([make_raw_row(**r) for r in rows])

    return _make


@pytest.fixture
def make_record() -> Callable[..., PayrollRecord]:
    """Factory for a valid non-cohort PayrollRecord."""

    def _make(**overrides: Any) -> PayrollRecord:
        data: dict[str, Any] = {
            "individual_id": "1001",
            "command": "075 PRECINCT",
            "rank": "POLICE OFFICER",
            "appointment_date": date(2010, 7, 1),
            "assignment_date": None,
            "fiscal_year": 2021,
            "leave_status": "ACTIVE",
            "base_salary": 85000,
            "regular_hours": 2080,
            "regular_paid": 84000,
            "ot_hours": 300,
            "ot_paid": 20000,
            "other_paid": 5000,
            "is_cohort_member": False,
            "is_cohort_year": False,
            "is_cohort_join_year": False,
            "tenure_years": 11.0,
        }
        data.update(overrides)
        return PayrollRecord.model_validate(data)

    return _make


@pytest.fixture
def cohort_flags() -> dict[str, bool]:
    """Flags of a cohort member in the year they joined."""
    return {"is_cohort_member": True, "is_cohort_year": True, "is_cohort_join_year": True}


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        data_dir=tmp_path / "data",
        output_dir=tmp_path / "out",
        cohort_commands=("COHORT UNIT",),
        specialized_commands=("SPECIAL UNIT",),
    )
