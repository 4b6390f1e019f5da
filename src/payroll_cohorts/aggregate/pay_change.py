"""Year-over-year pay changes per officer.

Each officer's record for fiscal year Y is compared with the same officer's
record for Y-1. When the prior year exists, a `<field>_change` delta is
attached for every pay field; when it does not, the record is left without
deltas. Records carrying a `total_paid_change` are then split into the
officer's first cohort year vs. every other year.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from payroll_cohorts.aggregate.partition import apply_leave_policy
from payroll_cohorts.aggregate.stats import Stats, compute_stats
from payroll_cohorts.models import (
    Individual,
    LeavePolicy,
    PayrollRecord,
    frame_to_records,
)
from payroll_cohorts.schema import CHANGE_FIELDS, PAY_FIELDS, change_field

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayChangeComparison:
    """Mean pay change in the cohort join year vs. all other years.

    Attributes:
        join_year: Stats over change fields for records in a cohort join year.
        other_years: Stats over change fields for every other record with a
            prior-year record.
    """
    join_year: Stats
    other_years: Stats

    def mean(self, field: str, join_year: bool) -> float:
        """Mean change of pay field `field` in one group.

        Raises:
            EmptyGroupError: if that group has no records.
        """
        group = self.join_year if join_year else self.other_years
        return group.average(change_field(field))


def group_individuals(records: Iterable[PayrollRecord]) -> list[Individual]:
    """Group records by officer, ordered by id and then fiscal year.

    If an officer has two records for the same fiscal year, the first one
    seen is kept.
    """
    grouped: dict[str, dict[int, PayrollRecord]] = {}
    duplicates = 0
    for record in records:
        by_year = grouped.setdefault(record.individual_id, {})
        if record.fiscal_year in by_year:
            duplicates += 1
            continue
        by_year[record.fiscal_year] = record

    if duplicates:
        log.warning("Ignored %d duplicate officer/fiscal-year records", duplicates)

    return [
        Individual(
            individual_id=individual_id,
            records=[by_year[y] for y in sorted(by_year)],
        )
        for individual_id, by_year in sorted(grouped.items())
    ]


def attach_pay_changes(individual: Individual) -> Individual:
    """Return `individual` with deltas attached wherever a prior year exists."""
    updated: list[PayrollRecord] = []
    for record in individual.records:
        prior = individual.record_for(record.fiscal_year - 1)
        if prior is None:
            updated.append(record)
            continue
        deltas = {change_field(f): getattr(record, f) - getattr(prior, f) for f in PAY_FIELDS}
        updated.append(record.model_copy(update=deltas))
    return individual.model_copy(update={"records": updated})


def compare_pay_changes(individuals: Iterable[Individual]) -> PayChangeComparison:
    """Split records with a computed total pay change by cohort join year.

    Args:
        individuals: Officers whose records already carry deltas
            (see `attach_pay_changes`).

    Returns:
        PayChangeComparison over `CHANGE_FIELDS`.
    """
    join_year: list[PayrollRecord] = []
    other_years: list[PayrollRecord] = []
    for individual in individuals:
        for record in individual.records:
            if record.total_paid_change is None:
                continue
            if record.is_cohort_join_year:
                join_year.append(record)
            else:
                other_years.append(record)

    log.info(
        "Pay changes: %d cohort join-year records, %d other records",
        len(join_year),
        len(other_years),
    )
    return PayChangeComparison(
        join_year=compute_stats(join_year, fields=CHANGE_FIELDS, label="first cohort year"),
        other_years=compute_stats(other_years, fields=CHANGE_FIELDS, label="other years"),
    )


def pay_change_comparison(
    records: pd.DataFrame,
    leave_policy: LeavePolicy = LeavePolicy.ALL,
) -> PayChangeComparison:
    """Compute the join-year vs. other-years comparison from a record frame.

    The leave policy is applied before deltas are computed, so a record
    whose prior year is excluded by the policy gets no delta.
    """
    included = apply_leave_policy(records, leave_policy)
    individuals = [attach_pay_changes(i) for i in group_individuals(frame_to_records(included))]
    return compare_pay_changes(individuals)
