"""Pydantic models and policy enums for normalized payroll data.

`PayrollRecord` is the validated, flat schema of one officer's pay for one
fiscal year. `Individual` groups an officer's records across years. The
helpers at the bottom convert between records and the pandas frames the
aggregation code works on.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Iterable

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, model_validator

from payroll_cohorts.schema import TOTAL_PAID_COMPONENTS


class LeaveStatus(str, Enum):
    """Leave status as of June 30 of the fiscal year."""
    ACTIVE = "ACTIVE"
    ON_LEAVE = "ON LEAVE"
    CEASED = "CEASED"
    ON_SEPARATION_LEAVE = "ON SEPARATION LEAVE"


class LeavePolicy(str, Enum):
    """Which leave statuses take part in a calculation."""
    ALL = "all"
    ACTIVE_ONLY = "active-only"


class EmptyGroupPolicy(str, Enum):
    """How report assembly renders a group with no records."""
    PLACEHOLDER = "placeholder"
    OMIT = "omit"


class PayrollRecord(BaseModel):
    """Schema for one officer's payroll record in one fiscal year.

    Attributes:
        individual_id: Stable identifier across years.
        command: Organizational unit name.
        rank: Rank title.
        appointment_date: Date appointed to the force.
        assignment_date: Date assigned to the current command, if known.
        fiscal_year: Year ending June 30 that the pay figures cover.
        leave_status: Leave status as of June 30, or None when unrecognized.
        total_paid: Always regular + overtime + other pay.
        is_cohort_member: Command is one of the cohort commands.
        is_cohort_year: Assigned to the cohort on or before the fiscal year end.
        is_cohort_join_year: Assignment fell inside this fiscal year.
        tenure_years: Years between appointment and the reference date.
        *_change: Difference from the prior fiscal year, None when there is
            no prior-year record.
    """
    model_config = ConfigDict(extra="forbid", frozen=True, use_enum_values=True)

    individual_id: str
    command: str
    rank: str
    appointment_date: date
    assignment_date: date | None = None
    fiscal_year: int = Field(..., gt=0)
    leave_status: LeaveStatus | None = None

    base_salary: int
    regular_hours: int
    regular_paid: int
    ot_hours: int
    ot_paid: int
    other_paid: int
    total_paid: int

    is_cohort_member: bool
    is_cohort_year: bool
    is_cohort_join_year: bool
    tenure_years: float = Field(..., ge=0)

    base_salary_change: int | None = None
    regular_hours_change: int | None = None
    regular_paid_change: int | None = None
    ot_hours_change: int | None = None
    ot_paid_change: int | None = None
    other_paid_change: int | None = None
    total_paid_change: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _derive_total_paid(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not all(f in data for f in TOTAL_PAID_COMPONENTS):
            return data
        try:
            derived = sum(int(data[f]) for f in TOTAL_PAID_COMPONENTS)
        except (TypeError, ValueError):
            # left to field validation
            return data
        supplied = data.get("total_paid")
        if supplied is not None and int(supplied) != derived:
            raise ValueError(
                f"total_paid={supplied} does not equal regular + ot + other pay ({derived})"
            )
        return {**data, "total_paid": derived}

    @model_validator(mode="after")
    def _check_cohort_flags(self) -> "PayrollRecord":
        if self.is_cohort_join_year and not self.is_cohort_year:
            raise ValueError("is_cohort_join_year requires is_cohort_year")
        if self.is_cohort_year and not self.is_cohort_member:
            raise ValueError("is_cohort_year requires is_cohort_member")
        return self


class Individual(BaseModel):
    """One officer's records across fiscal years, ordered by year."""
    model_config = ConfigDict(frozen=True)

    individual_id: str
    records: list[PayrollRecord]

    def record_for(self, fiscal_year: int) -> PayrollRecord | None:
        """Return the record for `fiscal_year`, or None if absent."""
        for record in self.records:
            if record.fiscal_year == fiscal_year:
                return record
        return None


RECORD_COLUMNS: list[str] = list(PayrollRecord.model_fields)

_DATE_COLUMNS = ("appointment_date", "assignment_date")
_NULLABLE_INT_COLUMNS = tuple(c for c in RECORD_COLUMNS if c.endswith("_change"))


def records_to_frame(records: Iterable[PayrollRecord]) -> pd.DataFrame:
    """Return a DataFrame with one row per record and stable column dtypes.

    Dates become `datetime64` columns and delta fields become nullable
    `Int64` columns, so missing deltas show as <NA>.
    """
    frame = pd.DataFrame([r.model_dump() for r in records], columns=RECORD_COLUMNS)
    for col in _DATE_COLUMNS:
        frame[col] = pd.to_datetime(frame[col])
    for col in _NULLABLE_INT_COLUMNS:
        frame[col] = frame[col].astype("Int64")
    return frame


def _to_python(value: Any) -> Any:
    """Convert pandas/numpy scalars into plain Python values for pydantic."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if isinstance(value, pd.Timestamp):
        return value.date()
    if hasattr(value, "item"):
        return value.item()
    return value


def row_to_record_input(row: dict[str, Any]) -> dict[str, Any]:
    """Prepare a frame row for `PayrollRecord.model_validate`.

    Only model fields are kept; working columns produced by the transform
    step are dropped.
    """
    return {k: _to_python(v) for k, v in row.items() if k in PayrollRecord.model_fields}


def frame_to_records(frame: pd.DataFrame) -> list[PayrollRecord]:
    """Validate every row of `frame` into a PayrollRecord."""
    return [
        PayrollRecord.model_validate(row_to_record_input(row))
        for row in frame.to_dict(orient="records")
    ]
