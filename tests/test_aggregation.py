from __future__ import annotations

import pytest

from payroll_cohorts.aggregate.stats import compute_stats
from payroll_cohorts.errors import EmptyGroupError
from payroll_cohorts.models import records_to_frame
from payroll_cohorts.schema import RECORD_FIELDS


def test_stats_count_and_sums(make_record) -> None:
    records = [
        make_record(individual_id="1", base_salary=80000, ot_paid=1000, tenure_years=2.5),
        make_record(individual_id="2", base_salary=90000, ot_paid=3000, tenure_years=7.25),
        make_record(individual_id="3", base_salary=100000, ot_paid=0, tenure_years=0.1),
    ]
    stats = compute_stats(records)
    assert stats.count == 3
    assert stats.total("base_salary") == 270000
    assert stats.total("ot_paid") == 4000
    assert stats.total("total_paid") == sum(r.total_paid for r in records)
    assert stats.total("tenure_years") == pytest.approx(9.85)
    assert set(stats.totals) == set(RECORD_FIELDS)


def test_average_is_total_over_count(make_record) -> None:
    stats = compute_stats([make_record(base_salary=80000), make_record(base_salary=90001)])
    assert stats.average("base_salary") == 170001 / 2
    assert stats.averages()["regular_hours"] == 2080


def test_empty_group_mean_is_an_error() -> None:
    stats = compute_stats(records_to_frame([]), label="NON-COHORT")
    assert stats.count == 0
    assert stats.total("total_paid") == 0
    with pytest.raises(EmptyGroupError, match="NON-COHORT"):
        stats.average("total_paid")
    with pytest.raises(EmptyGroupError):
        stats.averages()


def test_stats_do_not_depend_on_row_order(make_record) -> None:
    records = [make_record(individual_id=str(i), tenure_years=0.1 * i + 1e-9) for i in range(50)]
    forward = compute_stats(records_to_frame(records))
    backward = compute_stats(records_to_frame(list(reversed(records))))
    assert forward == backward
