"""Record loader: normalize, filter and validate yearly payroll tables.

Filtering stages, in order:
1. rows without a parseable, positive fiscal year (no profile match)
2. rows whose appointment date is missing or after June 30 of their fiscal
   year (presumed bad join between identity and payroll data)
3. rows with unparseable pay figures (raised instead in strict mode)
4. rows that fail `PayrollRecord` validation

Counts are logged after each stage.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

from payroll_cohorts.clean.transform import normalize_tables
from payroll_cohorts.clean.validate import validate_records
from payroll_cohorts.config import Settings
from payroll_cohorts.errors import MalformedRowError, NoSourceRowsError
from payroll_cohorts.models import records_to_frame

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadCounts:
    """Row counts at each loader stage.

    Attributes:
        imported: Source rows read.
        malformed_rows: Dropped for a missing or unparseable fiscal year.
        invalid_date_joins: Dropped for an appointment after the fiscal year end.
        invalid_numeric_rows: Dropped for unparseable pay figures.
        invalid_records: Dropped by model validation.
        loaded: Records returned.
    """
    imported: int
    malformed_rows: int
    invalid_date_joins: int
    invalid_numeric_rows: int
    invalid_records: int
    loaded: int


@dataclass(frozen=True)
class LoadResult:
    """Normalized records plus the ranks observed in them."""
    records: pd.DataFrame
    ranks: list[str]
    counts: LoadCounts


def observed_ranks(records: pd.DataFrame, executive_rank_prefix: str) -> list[str]:
    """Return the distinct ranks in `records`, sorted, without executive ranks."""
    ranks = sorted(set(records["rank"]))
    return [r for r in ranks if not r.startswith(executive_rank_prefix)]


def load_payroll_records(tables: list[pd.DataFrame], settings: Settings) -> LoadResult:
    """Turn raw yearly source tables into validated, normalized records.

    Args:
        tables: Raw source tables (text cells), one per fiscal year.
        settings: Pipeline settings (cohort commands, tenure reference date,
            date format, strict mode, executive rank prefix).

    Returns:
        LoadResult whose `records` frame has one row per PayrollRecord,
        sorted by (`individual_id`, `fiscal_year`).

    Raises:
        NoSourceRowsError: if the tables hold no rows at all.
        MalformedRowError: in strict mode, if any kept row has unparseable
            pay figures.
    """
    if sum(len(t) for t in tables) == 0:
        raise NoSourceRowsError("No payroll rows found in any source table.")

    pdf = normalize_tables(
        tables,
        cohort_commands=settings.cohort_commands,
        as_of_date=settings.as_of_date,
        date_format=settings.date_format,
    ).compute()
    imported = len(pdf)
    log.info("Imported payroll records: %d", imported)

    has_year = (pdf["fiscal_year"] > 0).fillna(False).astype(bool)
    pdf = pdf[has_year]
    malformed = imported - len(pdf)
    log.info("Profiles matched to payroll: %d (dropped %d without a fiscal year)", len(pdf), malformed)

    appointed = (pdf["appointment_date"] <= pdf["fiscal_year_end"]).astype(bool)
    date_joins = int((~appointed).sum())
    pdf = pdf[appointed]
    log.info(
        "Records appointed by fiscal year end: %d (dropped %d presumed bad joins)",
        len(pdf),
        date_joins,
    )

    numeric_ok = pdf["numeric_ok"].astype(bool)
    bad_numeric = int((~numeric_ok).sum())
    if bad_numeric:
        first = pdf.loc[~numeric_ok].iloc[0]
        msg = (
            f"{bad_numeric} rows have unparseable pay figures "
            f"(first: individual_id={first['individual_id']} fiscal_year={first['fiscal_year']})"
        )
        if settings.strict_numeric:
            raise MalformedRowError(msg)
        log.warning("Dropping %s", msg)
    pdf = pdf[numeric_ok]

    records, invalid = validate_records(pdf)
    if invalid:
        log.warning("Dropped %d rows that failed record validation", invalid)

    frame = (
        records_to_frame(records)
        .sort_values(["individual_id", "fiscal_year"], kind="mergesort")
        .reset_index(drop=True)
    )
    ranks = observed_ranks(frame, settings.executive_rank_prefix)

    counts = LoadCounts(
        imported=imported,
        malformed_rows=malformed,
        invalid_date_joins=date_joins,
        invalid_numeric_rows=bad_numeric,
        invalid_records=invalid,
        loaded=len(frame),
    )
    log.info("Loaded %d payroll records across %d ranks", counts.loaded, len(ranks))
    return LoadResult(records=frame, ranks=ranks, counts=counts)
