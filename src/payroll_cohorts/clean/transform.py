"""Normalization of raw payroll rows.

Raw source tables are concatenated into a Dask DataFrame and normalized
partition-wise. Every derived column depends on its own row only, so
partitioning never changes the result. The output keeps the working
columns `fiscal_year_end` and `numeric_ok` that the loader filters on.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, cast

import numpy as np
import pandas as pd
import dask.dataframe as dd

from payroll_cohorts.errors import MissingColumnsError, NoSourceRowsError
from payroll_cohorts.models import LeaveStatus
from payroll_cohorts.schema import (
    REQUIRED_SOURCE_COLUMNS,
    SOURCE_APPOINTMENT_DATE,
    SOURCE_ASSIGNMENT_DATE,
    SOURCE_COMMAND,
    SOURCE_FISCAL_YEAR,
    SOURCE_ID,
    SOURCE_LEAVE_STATUS,
    SOURCE_NUMERIC_COLUMNS,
    SOURCE_RANK,
    TOTAL_PAID_COMPONENTS,
)

log = logging.getLogger(__name__)

ROWS_PER_PARTITION = 200_000
_LEAVE_STATUSES = [s.value for s in LeaveStatus]


def check_source_columns(pdf: pd.DataFrame, source: str | None = None) -> None:
    """Raise `MissingColumnsError` unless every required column is present."""
    missing = [c for c in REQUIRED_SOURCE_COLUMNS if c not in pdf.columns]
    if missing:
        raise MissingColumnsError(missing, source)


def _text(series: pd.Series) -> pd.Series:
    return series.astype(str).str.strip()


def parse_int(series: pd.Series) -> pd.Series:
    """Parse text pay figures into nullable integers.

    `$` and `,` are ignored and fractions are truncated toward zero.
    Blank or non-numeric text becomes <NA>.
    """
    cleaned = _text(series).str.replace(r"[$,]", "", regex=True)
    values = pd.to_numeric(cleaned, errors="coerce").astype("float64")
    values = values.where(np.isfinite(values))
    return pd.Series(np.trunc(values), index=series.index).astype("Int64")


def parse_date(series: pd.Series, date_format: str) -> pd.Series:
    """Parse text dates with `date_format`; unparseable values become NaT."""
    return pd.to_datetime(_text(series), format=date_format, errors="coerce")


def june_30(fiscal_year: pd.Series) -> pd.Series:
    """Return June 30 of each fiscal year (the fiscal year end), NaT when missing."""
    return pd.to_datetime(
        fiscal_year.astype("string") + "-06-30",
        format="%Y-%m-%d",
        errors="coerce",
    )


def cohort_flags(
    command: pd.Series,
    assignment_date: pd.Series,
    fiscal_year: pd.Series,
    cohort_commands: tuple[str, ...],
) -> pd.DataFrame:
    """Derive the cohort membership flags for each row.

    Returns:
        DataFrame with boolean columns `is_cohort_member`, `is_cohort_year`
        (assigned on or before the fiscal year end) and `is_cohort_join_year`
        (assigned strictly between the previous and current fiscal year ends).
    """
    member = command.isin(cohort_commands).astype(bool)
    fy_end = june_30(fiscal_year)
    prev_end = june_30(fiscal_year - 1)

    cohort_year = member & (assignment_date <= fy_end).astype(bool)
    join_year = (
        member
        & (assignment_date > prev_end).astype(bool)
        & (assignment_date < fy_end).astype(bool)
    )
    return pd.DataFrame(
        {
            "is_cohort_member": member,
            "is_cohort_year": cohort_year,
            "is_cohort_join_year": join_year,
        },
        index=command.index,
    )


def tenure_years(appointment_date: pd.Series, as_of_date: date) -> pd.Series:
    """Years between appointment and `as_of_date`: whole days / 365."""
    elapsed = (pd.Timestamp(as_of_date) - appointment_date).abs()
    return elapsed.dt.days / 365


def normalize_partition(
    pdf: pd.DataFrame,
    cohort_commands: tuple[str, ...],
    as_of_date: date,
    date_format: str,
) -> pd.DataFrame:
    """Map one partition of raw source rows to the normalized schema.

    Args:
        pdf: Raw partition with the required source columns as text.
        cohort_commands: Commands that make up the cohort.
        as_of_date: Tenure reference date.
        date_format: strptime format of source dates.

    Returns:
        Normalized pandas DataFrame with the same index as `pdf`.
    """
    out = pd.DataFrame(index=pdf.index)
    out["individual_id"] = _text(pdf[SOURCE_ID])
    out["command"] = _text(pdf[SOURCE_COMMAND])
    out["rank"] = _text(pdf[SOURCE_RANK])
    out["appointment_date"] = parse_date(pdf[SOURCE_APPOINTMENT_DATE], date_format)
    out["assignment_date"] = parse_date(pdf[SOURCE_ASSIGNMENT_DATE], date_format)
    out["fiscal_year"] = parse_int(pdf[SOURCE_FISCAL_YEAR])

    status = _text(pdf[SOURCE_LEAVE_STATUS]).str.upper()
    out["leave_status"] = status.where(status.isin(_LEAVE_STATUSES), None)

    for field, column in SOURCE_NUMERIC_COLUMNS.items():
        out[field] = parse_int(pdf[column])
    out["total_paid"] = sum(out[f] for f in TOTAL_PAID_COMPONENTS)

    out["fiscal_year_end"] = june_30(out["fiscal_year"])
    flags = cohort_flags(
        out["command"], out["assignment_date"], out["fiscal_year"], cohort_commands
    )
    out = pd.concat([out, flags], axis=1)
    out["tenure_years"] = tenure_years(out["appointment_date"], as_of_date)
    out["numeric_ok"] = out[list(SOURCE_NUMERIC_COLUMNS)].notna().all(axis=1)
    return out


def normalize_tables(
    tables: list[pd.DataFrame],
    cohort_commands: tuple[str, ...],
    as_of_date: date,
    date_format: str = "%m/%d/%Y",
) -> Any:
    """Concatenate raw source tables and normalize them with Dask.

    Tables are concatenated in the order given, so the row order of the
    result is the source order.

    Returns:
        Dask DataFrame of normalized rows (see `normalize_partition`).

    Raises:
        NoSourceRowsError: if `tables` is empty.
        MissingColumnsError: if any table lacks a required column.
    """
    if not tables:
        raise NoSourceRowsError("No payroll source tables were supplied.")

    for i, pdf in enumerate(tables):
        check_source_columns(pdf, source=f"table {i}")

    raw = pd.concat(
        [pdf[list(REQUIRED_SOURCE_COLUMNS)] for pdf in tables],
        ignore_index=True,
    )
    nparts = max(1, len(raw) // ROWS_PER_PARTITION)
    log.info("Normalizing %d source rows in %d Dask partitions", len(raw), nparts)

    dd_mod = cast(Any, dd)
    ddf = dd_mod.from_pandas(raw, npartitions=nparts)

    kwargs = {
        "cohort_commands": tuple(cohort_commands),
        "as_of_date": as_of_date,
        "date_format": date_format,
    }
    meta = normalize_partition(ddf._meta, **kwargs)
    return ddf.map_partitions(normalize_partition, meta=meta, **kwargs)
