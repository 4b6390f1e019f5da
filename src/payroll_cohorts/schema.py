"""Column names for source payroll tables and normalized records.

Source column names must match the published payroll extracts exactly
(case and spacing included).
"""

from __future__ import annotations

# Source table columns
SOURCE_ID = "taxid"
SOURCE_COMMAND = "command"
SOURCE_RANK = "rank"
SOURCE_APPOINTMENT_DATE = "appt_date"
SOURCE_ASSIGNMENT_DATE = "assignment_date"
SOURCE_FISCAL_YEAR = "Fiscal Year"
SOURCE_LEAVE_STATUS = "Leave Status as of June 30"

# normalized field -> source column
SOURCE_NUMERIC_COLUMNS: dict[str, str] = {
    "base_salary": "Base Salary",
    "regular_hours": "Regular Hours",
    "regular_paid": "Regular Gross Paid",
    "ot_hours": "OT Hours",
    "ot_paid": "Total OT Paid",
    "other_paid": "Total Other Pay",
}

REQUIRED_SOURCE_COLUMNS: tuple[str, ...] = (
    SOURCE_ID,
    SOURCE_COMMAND,
    SOURCE_RANK,
    SOURCE_APPOINTMENT_DATE,
    SOURCE_ASSIGNMENT_DATE,
    SOURCE_FISCAL_YEAR,
    SOURCE_LEAVE_STATUS,
    *SOURCE_NUMERIC_COLUMNS.values(),
)

# total_paid is never read from the source
TOTAL_PAID_COMPONENTS: tuple[str, ...] = ("regular_paid", "ot_paid", "other_paid")

PAY_FIELDS: tuple[str, ...] = (
    "base_salary",
    "regular_hours",
    "regular_paid",
    "ot_hours",
    "ot_paid",
    "other_paid",
    "total_paid",
)
RECORD_FIELDS: tuple[str, ...] = (*PAY_FIELDS, "tenure_years")


def change_field(field: str) -> str:
    """Return the name of the year-over-year delta field for `field`."""
    return f"{field}_change"


CHANGE_FIELDS: tuple[str, ...] = tuple(change_field(f) for f in PAY_FIELDS)
