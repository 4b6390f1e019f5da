from __future__ import annotations

from datetime import date

import pandas as pd
import pytest
from pydantic import ValidationError

from payroll_cohorts.models import PayrollRecord, frame_to_records, records_to_frame


def _record_input(**overrides: object) -> dict[str, object]:
    rec: dict[str, object] = {
        "individual_id": "1001",
        "command": "COHORT UNIT",
        "rank": "POLICE OFFICER",
        "appointment_date": date(2015, 1, 5),
        "assignment_date": date(2020, 9, 1),
        "fiscal_year": 2021,
        "leave_status": "ACTIVE",
        "base_salary": 85000,
        "regular_hours": 2080,
        "regular_paid": 84000,
        "ot_hours": 300,
        "ot_paid": 20000,
        "other_paid": 5000,
        "is_cohort_member": True,
        "is_cohort_year": True,
        "is_cohort_join_year": True,
        "tenure_years": 6.9,
    }
    rec.update(overrides)
    return rec


def test_payroll_record_derives_total_paid() -> None:
    record = PayrollRecord.model_validate(_record_input())
    assert record.total_paid == 109000
    assert record.leave_status == "ACTIVE"
    assert record.total_paid_change is None


def test_payroll_record_rejects_inconsistent_total_paid() -> None:
    with pytest.raises(ValidationError, match="total_paid"):
        PayrollRecord.model_validate(_record_input(total_paid=1))


def test_payroll_record_rejects_flags_that_do_not_nest() -> None:
    with pytest.raises(ValidationError):
        PayrollRecord.model_validate(_record_input(is_cohort_year=False))
    with pytest.raises(ValidationError):
        PayrollRecord.model_validate(_record_input(is_cohort_member=False, is_cohort_join_year=False))


def test_payroll_record_rejects_non_positive_fiscal_year() -> None:
    with pytest.raises(ValidationError):
        PayrollRecord.model_validate(_record_input(fiscal_year=0))


def test_payroll_record_rejects_unknown_leave_status() -> None:
    with pytest.raises(ValidationError):
        PayrollRecord.model_validate(_record_input(leave_status="RETIRED"))


def test_frame_conversion_keeps_missing_deltas_missing() -> None:
    record = PayrollRecord.model_validate(_record_input(assignment_date=None))
    frame = records_to_frame([record])
    assert pd.isna(frame.loc[0, "total_paid_change"])
    assert pd.isna(frame.loc[0, "assignment_date"])
    assert frame_to_records(frame) == [record]
