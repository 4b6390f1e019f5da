from __future__ import annotations

import pytest

from payroll_cohorts.aggregate.partition import (
    build_breakdown,
    latest_fiscal_year,
    rank_comparisons,
    stats_by_command,
    tenure_comparisons,
)
from payroll_cohorts.errors import NoSourceRowsError
from payroll_cohorts.models import LeavePolicy, records_to_frame

MEMBER = {"command": "COHORT UNIT", "is_cohort_member": True}


def test_rank_needs_more_than_minimum_cohort_members(make_record) -> None:
    records = [make_record(individual_id=f"s{i}", rank="SERGEANT", **MEMBER) for i in range(5)]
    records += [make_record(individual_id=f"d{i}", rank="DETECTIVE", **MEMBER) for i in range(6)]
    records += [make_record(individual_id="n1", rank="DETECTIVE")]
    comps = rank_comparisons(records_to_frame(records), ["SERGEANT", "DETECTIVE"], 5)
    assert [c.label for c in comps] == ["DETECTIVE"]
    assert comps[0].cohort.count == 6
    assert comps[0].non_cohort.count == 1


def test_rank_order_follows_caller(make_record) -> None:
    records = [make_record(individual_id=f"{r}{i}", rank=r, **MEMBER) for r in "AB" for i in range(2)]
    comps = rank_comparisons(records_to_frame(records), ["B", "A"], 1)
    assert [c.label for c in comps] == ["B", "A"]


def test_tenure_bucket_upper_bound_is_inclusive(make_record) -> None:
    frame = records_to_frame([
        make_record(individual_id="1", tenure_years=10.0),
        make_record(individual_id="2", tenure_years=10.0001),
        make_record(individual_id="3", tenure_years=0.0),
    ])
    comps = tenure_comparisons(frame, (5, 10, 15))
    assert [c.label for c in comps] == ["0-5 years", "5-10 years", "10-15 years"]
    assert [c.non_cohort.count for c in comps] == [0, 1, 1]
    assert all(c.cohort.count == 0 for c in comps)


def test_commands_sorted_case_sensitive(make_record) -> None:
    frame = records_to_frame([
        make_record(individual_id="1", command="b unit"),
        make_record(individual_id="2", command="B UNIT"),
        make_record(individual_id="3", command="A UNIT"),
        make_record(individual_id="4", command="B UNIT"),
    ])
    by_command = stats_by_command(frame)
    assert list(by_command) == ["A UNIT", "B UNIT", "b unit"]
    assert by_command["B UNIT"].count == 2


def test_breakdown_uses_latest_year_by_default(make_record) -> None:
    frame = records_to_frame([
        make_record(individual_id="1", fiscal_year=2020, **MEMBER),
        make_record(individual_id="1", fiscal_year=2021, **MEMBER),
        make_record(individual_id="2", fiscal_year=2021, command="SPECIAL UNIT"),
        make_record(individual_id="3", fiscal_year=2021),
    ])
    breakdown = build_breakdown(frame, ["POLICE OFFICER"], ("SPECIAL UNIT",), rank_minimum=0)
    assert breakdown.target_year == 2021
    assert breakdown.cohort.count == 1
    assert breakdown.non_cohort.count == 2
    assert breakdown.specialized.count == 1
    assert list(breakdown.by_command) == ["075 PRECINCT", "COHORT UNIT", "SPECIAL UNIT"]
    assert [c.label for c in breakdown.by_rank] == ["POLICE OFFICER"]

    earlier = build_breakdown(frame, [], ("SPECIAL UNIT",), target_year=2020)
    assert earlier.cohort.count == 1
    assert earlier.non_cohort.is_empty


def test_active_only_policy_excludes_other_statuses(make_record) -> None:
    frame = records_to_frame([
        make_record(individual_id="1"),
        make_record(individual_id="2", leave_status="ON LEAVE"),
        make_record(individual_id="3", leave_status=None),
    ])
    everyone = build_breakdown(frame, [], (), leave_policy=LeavePolicy.ALL)
    active = build_breakdown(frame, [], (), leave_policy=LeavePolicy.ACTIVE_ONLY)
    assert everyone.non_cohort.count == 3
    assert active.non_cohort.count == 1


def test_latest_year_of_nothing_is_an_error(make_record) -> None:
    with pytest.raises(NoSourceRowsError):
        latest_fiscal_year(records_to_frame([]))
