from __future__ import annotations

from datetime import date

import pandas as pd
import pytest

from payroll_cohorts.clean.transform import (
    normalize_partition,
    normalize_tables,
    parse_int,
    tenure_years,
)
from payroll_cohorts.errors import MissingColumnsError, NoSourceRowsError

COHORT = ("COHORT UNIT",)
AS_OF = date(2021, 11, 30)


def _normalize(table: pd.DataFrame) -> pd.DataFrame:
    return normalize_partition(table, COHORT, AS_OF, "%m/%d/%Y")


def test_parse_int_strips_currency_and_truncates() -> None:
    out = parse_int(pd.Series(["$85,292.99", " 12 ", "-3.7", "", "n/a"]))
    assert out.tolist()[:3] == [85292, 12, -3]
    assert out.isna().tolist() == [False, False, False, True, True]


def test_total_paid_is_sum_of_components(make_table) -> None:
    out = _normalize(make_table({}))
    row = out.iloc[0]
    assert row["regular_paid"] == 84000
    assert row["ot_hours"] == 300
    assert row["total_paid"] == 84000 + 20000 + 5000


def test_cohort_join_year_inside_fiscal_year_window(make_table) -> None:
    out = _normalize(make_table(
        {"command": "COHORT UNIT", "assignment_date": "9/1/2020", "Fiscal Year": "2021"},
        {"command": "COHORT UNIT", "assignment_date": "9/1/2020", "Fiscal Year": "2020"},
        {"command": "COHORT UNIT", "assignment_date": "9/1/2019", "Fiscal Year": "2021"},
    ))
    assert out["is_cohort_member"].tolist() == [True, True, True]
    assert out["is_cohort_year"].tolist() == [True, False, True]
    assert out["is_cohort_join_year"].tolist() == [True, False, False]


def test_assignment_on_fiscal_year_end_is_cohort_year_but_not_join_year(make_table) -> None:
    out = _normalize(make_table(
        {"command": "COHORT UNIT", "assignment_date": "6/30/2021", "Fiscal Year": "2021"},
        {"command": "COHORT UNIT", "assignment_date": "6/30/2020", "Fiscal Year": "2021"},
    ))
    assert out["is_cohort_year"].tolist() == [True, True]
    assert out["is_cohort_join_year"].tolist() == [False, False]


def test_non_member_has_no_cohort_flags(make_table) -> None:
    out = _normalize(make_table({"assignment_date": "9/1/2020"}))
    assert not out.loc[0, "is_cohort_member"]
    assert not out.loc[0, "is_cohort_year"]
    assert not out.loc[0, "is_cohort_join_year"]


def test_tenure_is_days_over_365() -> None:
    appointed = pd.to_datetime(pd.Series(["2011-12-03", "2022-11-30"]))
    assert tenure_years(appointed, AS_OF).tolist() == [10.0, 1.0]


def test_unknown_leave_status_and_bad_numbers_are_flagged(make_table) -> None:
    out = _normalize(make_table({"Leave Status as of June 30": "retired", "OT Hours": "x"}))
    assert pd.isna(out.loc[0, "leave_status"])
    assert not out.loc[0, "numeric_ok"]


def test_normalize_tables_matches_partition_function(make_table) -> None:
    a = make_table({"taxid": "1"}, {"taxid": "2"})
    b = make_table({"taxid": "3", "Fiscal Year": "2020"})
    out = normalize_tables([a, b], COHORT, AS_OF).compute()
    assert out["individual_id"].tolist() == ["1", "2", "3"]
    assert out["fiscal_year"].tolist() == [2021, 2021, 2020]


def test_normalize_tables_requires_exact_columns(make_table) -> None:
    table = make_table({}).rename(columns={"Fiscal Year": "fiscal year"})
    with pytest.raises(MissingColumnsError, match="Fiscal Year"):
        normalize_tables([table], COHORT, AS_OF)


def test_normalize_tables_rejects_no_tables() -> None:
    with pytest.raises(NoSourceRowsError):
        normalize_tables([], COHORT, AS_OF)
