"""Count/sum/average statistics over groups of payroll records.

Sums are exact for integer columns (summed as Python ints) and correctly
rounded for float columns (`math.fsum`). Both are independent of row order
and partitioning, so averages are reproducible bit-for-bit.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Union

import pandas as pd

from payroll_cohorts.errors import EmptyGroupError
from payroll_cohorts.models import PayrollRecord, records_to_frame
from payroll_cohorts.schema import RECORD_FIELDS

Records = Union[pd.DataFrame, Iterable[PayrollRecord]]


@dataclass(frozen=True)
class Stats:
    """Aggregate of a group of records.

    Attributes:
        count: Number of records in the group.
        totals: Per-field sum.
        fields: Fields summarized, in declaration order.
        label: Optional group name, used in error messages.
    """
    count: int
    totals: dict[str, float]
    fields: tuple[str, ...] = RECORD_FIELDS
    label: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def total(self, field: str) -> float:
        return self.totals[field]

    def average(self, field: str) -> float:
        """Return the arithmetic mean of `field`.

        Raises:
            EmptyGroupError: if the group has no records.
        """
        if self.count == 0:
            raise EmptyGroupError(field, self.label)
        return self.totals[field] / self.count

    def averages(self) -> dict[str, float]:
        """Return the mean of every field (raises `EmptyGroupError` when empty)."""
        return {f: self.average(f) for f in self.fields}


def _column_sum(series: pd.Series) -> float:
    if series.empty:
        return 0
    if pd.api.types.is_integer_dtype(series.dtype):
        return sum(int(v) for v in series)
    return math.fsum(float(v) for v in series)


def compute_stats(
    records: Records,
    fields: tuple[str, ...] = RECORD_FIELDS,
    label: str | None = None,
) -> Stats:
    """Summarize `records` over `fields`.

    Args:
        records: A DataFrame of normalized records or an iterable of
            PayrollRecord.
        fields: Numeric fields to sum and average.
        label: Optional group name carried into `EmptyGroupError`.

    Returns:
        Stats with the record count and per-field totals.

    Raises:
        KeyError: if a field is not a column of `records`.
    """
    frame = records if isinstance(records, pd.DataFrame) else records_to_frame(records)
    totals = {f: _column_sum(frame[f]) for f in fields}
    return Stats(count=len(frame), totals=totals, fields=tuple(fields), label=label)
