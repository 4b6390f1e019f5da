"""Cohort partitioning for the target fiscal year.

Functions in this module slice the normalized record frame along command,
rank, tenure and cohort membership, and summarize each slice with
`compute_stats`. Every grouping is built inside the function that returns
it; nothing is accumulated at module level.

Expectations:
- Input: a pandas DataFrame as returned by `load_payroll_records`, with at
  least `fiscal_year`, `command`, `rank`, `leave_status`, `tenure_years`,
  `is_cohort_member` and the numeric record fields.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

from payroll_cohorts.aggregate.stats import Stats, compute_stats
from payroll_cohorts.errors import NoSourceRowsError
from payroll_cohorts.models import LeavePolicy, LeaveStatus

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupComparison:
    """Cohort vs non-cohort statistics for one rank or tenure bucket."""
    label: str
    cohort: Stats
    non_cohort: Stats


@dataclass(frozen=True)
class CohortBreakdown:
    """All target-year groupings that feed the command and rank/tenure reports.

    Attributes:
        target_year: Fiscal year every group is restricted to.
        cohort: All cohort members.
        non_cohort: Everyone else.
        specialized: Officers in the related specialized commands.
        by_command: Stats per command, ordered by command name.
        by_rank: Ranks with enough cohort members, in caller order.
        by_tenure: Tenure buckets, in boundary order.
    """
    target_year: int
    cohort: Stats
    non_cohort: Stats
    specialized: Stats
    by_command: dict[str, Stats]
    by_rank: list[GroupComparison]
    by_tenure: list[GroupComparison]


def latest_fiscal_year(records: pd.DataFrame) -> int:
    """Return the most recent fiscal year present in `records`.

    Raises:
        NoSourceRowsError: if `records` is empty.
    """
    if records.empty:
        raise NoSourceRowsError("No payroll records to partition.")
    return int(records["fiscal_year"].max())


def apply_leave_policy(records: pd.DataFrame, policy: LeavePolicy) -> pd.DataFrame:
    """Return the records that take part in a calculation under `policy`."""
    if LeavePolicy(policy) is LeavePolicy.ALL:
        return records
    return records[records["leave_status"] == LeaveStatus.ACTIVE.value]


def for_year(records: pd.DataFrame, fiscal_year: int) -> pd.DataFrame:
    return records[records["fiscal_year"] == fiscal_year]


def split_cohort(records: pd.DataFrame) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Split `records` into (cohort members, non-members)."""
    member = records["is_cohort_member"].astype(bool)
    return records[member], records[~member]


def stats_by_command(records: pd.DataFrame) -> dict[str, Stats]:
    """Return Stats per command, ordered by command name (case-sensitive)."""
    return {
        command: compute_stats(group, label=command)
        for command, group in sorted(records.groupby("command", sort=False), key=lambda kv: kv[0])
    }


def rank_comparisons(
    records: pd.DataFrame,
    ranks: list[str],
    rank_minimum: int,
) -> list[GroupComparison]:
    """Compare cohort and non-cohort officers of each sufficiently common rank.

    A rank is included only if it has strictly more than `rank_minimum`
    cohort members in `records`. The non-cohort side may still be empty.

    Args:
        records: Records of a single fiscal year.
        ranks: Ranks to consider, in output order.
        rank_minimum: Cohort population a rank must exceed.
    """
    cohort, non_cohort = split_cohort(records)
    out: list[GroupComparison] = []
    for rank in ranks:
        cohort_rank = cohort[cohort["rank"] == rank]
        if len(cohort_rank) <= rank_minimum:
            continue
        non_cohort_rank = non_cohort[non_cohort["rank"] == rank]
        out.append(
            GroupComparison(
                label=rank,
                cohort=compute_stats(cohort_rank, label=f"COHORT {rank}"),
                non_cohort=compute_stats(non_cohort_rank, label=f"NON-COHORT {rank}"),
            )
        )
    return out


def tenure_bucket(records: pd.DataFrame, lower: float, upper: float) -> pd.DataFrame:
    """Return records with `lower < tenure_years <= upper`."""
    tenure = records["tenure_years"]
    return records[(tenure > lower) & (tenure <= upper)]


def tenure_comparisons(
    records: pd.DataFrame,
    boundaries: tuple[int, ...],
) -> list[GroupComparison]:
    """Compare cohort and non-cohort officers per tenure bucket.

    Buckets are half-open `(previous, boundary]`, starting from 0.
    """
    cohort, non_cohort = split_cohort(records)
    out: list[GroupComparison] = []
    lower = 0
    for upper in boundaries:
        label = f"{lower}-{upper} years"
        out.append(
            GroupComparison(
                label=label,
                cohort=compute_stats(tenure_bucket(cohort, lower, upper), label=f"COHORT {label}"),
                non_cohort=compute_stats(
                    tenure_bucket(non_cohort, lower, upper), label=f"NON-COHORT {label}"
                ),
            )
        )
        lower = upper
    return out


def build_breakdown(
    records: pd.DataFrame,
    ranks: list[str],
    specialized_commands: tuple[str, ...],
    rank_minimum: int = 5,
    tenure_boundaries: tuple[int, ...] = (5, 10, 15, 20, 25, 30),
    target_year: int | None = None,
    leave_policy: LeavePolicy = LeavePolicy.ALL,
) -> CohortBreakdown:
    """Build every target-year grouping used by the aggregate reports.

    Args:
        records: Normalized records across all fiscal years.
        ranks: Candidate ranks for the per-rank comparison.
        specialized_commands: Commands of the secondary comparison group.
        rank_minimum: See `rank_comparisons`.
        tenure_boundaries: See `tenure_comparisons`.
        target_year: Fiscal year to report on; defaults to the latest year.
        leave_policy: Leave statuses included.

    Returns:
        CohortBreakdown for the target year.
    """
    year = target_year if target_year is not None else latest_fiscal_year(records)
    current = for_year(apply_leave_policy(records, leave_policy), year)
    log.info("Partitioning %d records for fiscal year %d", len(current), year)

    cohort, non_cohort = split_cohort(current)
    specialized = current[current["command"].isin(specialized_commands)]

    return CohortBreakdown(
        target_year=year,
        cohort=compute_stats(cohort, label="ALL COHORT"),
        non_cohort=compute_stats(non_cohort, label="NON-COHORT"),
        specialized=compute_stats(specialized, label="OTHER SPECIALIZED"),
        by_command=stats_by_command(current),
        by_rank=rank_comparisons(current, ranks, rank_minimum),
        by_tenure=tenure_comparisons(current, tenure_boundaries),
    )
