"""Assemble report tables from partitioned statistics.

Each builder returns a pandas DataFrame ready to be written as CSV. Groups
with no records are rendered according to an explicit `EmptyGroupPolicy`:

- PLACEHOLDER: the row is kept with `officers = 0`, blank averages and
  zero totals
- OMIT: the row is left out
"""
from __future__ import annotations

from typing import Any

import pandas as pd

from payroll_cohorts.aggregate.partition import CohortBreakdown, GroupComparison
from payroll_cohorts.aggregate.pay_change import PayChangeComparison
from payroll_cohorts.aggregate.stats import Stats
from payroll_cohorts.models import EmptyGroupPolicy
from payroll_cohorts.schema import PAY_FIELDS, RECORD_FIELDS, change_field

ALL_COHORT = "ALL COHORT"
NON_COHORT = "NON-COHORT"
OTHER_SPECIALIZED = "OTHER SPECIALIZED"

JOIN_YEAR_COLUMN = "change first cohort year"
OTHER_YEARS_COLUMN = "change other years"


def report_columns(include_totals: bool) -> list[str]:
    """Column order: label, count, averages, then totals."""
    cols = ["command", "officers"] + [f"avg_{f}" for f in RECORD_FIELDS]
    if include_totals:
        cols += [f"total_{f}" for f in RECORD_FIELDS]
    return cols


def stats_row(
    label: str,
    stats: Stats,
    policy: EmptyGroupPolicy,
    include_totals: bool = True,
) -> dict[str, Any] | None:
    """Return one report row for `stats`, or None when the policy omits it."""
    if stats.is_empty and EmptyGroupPolicy(policy) is EmptyGroupPolicy.OMIT:
        return None

    row: dict[str, Any] = {"command": label, "officers": stats.count}
    averages = {} if stats.is_empty else stats.averages()
    for f in RECORD_FIELDS:
        row[f"avg_{f}"] = averages.get(f)
    if include_totals:
        for f in RECORD_FIELDS:
            row[f"total_{f}"] = stats.total(f)
    return row


def _keep(rows: list[dict[str, Any]], row: dict[str, Any] | None) -> None:
    if row is not None:
        rows.append(row)


def commands_report(breakdown: CohortBreakdown, policy: EmptyGroupPolicy) -> pd.DataFrame:
    """Per-command summary with the two cohort summary rows first."""
    rows: list[dict[str, Any]] = []
    _keep(rows, stats_row(ALL_COHORT, breakdown.cohort, policy))
    _keep(rows, stats_row(NON_COHORT, breakdown.non_cohort, policy))
    for command, stats in breakdown.by_command.items():
        _keep(rows, stats_row(command, stats, policy))
    return pd.DataFrame(rows, columns=report_columns(include_totals=True))


def _comparison_rows(
    rows: list[dict[str, Any]],
    comparisons: list[GroupComparison],
    policy: EmptyGroupPolicy,
) -> None:
    for comp in comparisons:
        _keep(rows, stats_row(f"{NON_COHORT} {comp.label}", comp.non_cohort, policy, False))
        _keep(rows, stats_row(f"COHORT {comp.label}", comp.cohort, policy, False))
        rows.append({})


def rank_tenure_report(breakdown: CohortBreakdown, policy: EmptyGroupPolicy) -> pd.DataFrame:
    """Cohort vs. non-cohort averages overall, by rank and by tenure.

    Groupings are separated by blank rows; the rank and tenure sections
    start with a heading row.
    """
    rows: list[dict[str, Any]] = []
    _keep(rows, stats_row(NON_COHORT, breakdown.non_cohort, policy, False))
    _keep(rows, stats_row(ALL_COHORT, breakdown.cohort, policy, False))
    rows.append({})
    _keep(rows, stats_row(OTHER_SPECIALIZED, breakdown.specialized, policy, False))
    _keep(rows, stats_row(ALL_COHORT, breakdown.cohort, policy, False))
    rows.append({})

    rows.append({"command": "By Rank"})
    _comparison_rows(rows, breakdown.by_rank, policy)

    rows.append({"command": "By Tenure"})
    _comparison_rows(rows, breakdown.by_tenure, policy)

    return pd.DataFrame(rows, columns=report_columns(include_totals=False))


def pay_change_report(comparison: PayChangeComparison, policy: EmptyGroupPolicy) -> pd.DataFrame:
    """Mean year-over-year change per pay field, first cohort year vs. other years."""
    columns = ["field", JOIN_YEAR_COLUMN, OTHER_YEARS_COLUMN]
    any_empty = comparison.join_year.is_empty or comparison.other_years.is_empty
    if any_empty and EmptyGroupPolicy(policy) is EmptyGroupPolicy.OMIT:
        return pd.DataFrame([], columns=columns)

    rows = []
    for f in PAY_FIELDS:
        rows.append(
            {
                "field": change_field(f),
                JOIN_YEAR_COLUMN: None if comparison.join_year.is_empty else comparison.mean(f, True),
                OTHER_YEARS_COLUMN: None
                if comparison.other_years.is_empty
                else comparison.mean(f, False),
            }
        )
    return pd.DataFrame(rows, columns=columns)
