"""Validation utilities for normalized payroll rows.

Rows are validated against the `PayrollRecord` model. A row that fails
(for example one whose cohort flags contradict each other) is counted and
dropped rather than aborting the run.
"""
from __future__ import annotations

import logging

import pandas as pd
from pydantic import ValidationError

from payroll_cohorts.models import PayrollRecord, row_to_record_input

log = logging.getLogger(__name__)


def validate_records(pdf: pd.DataFrame) -> tuple[list[PayrollRecord], int]:
    """Validate a pandas frame of normalized rows using Pydantic.

    Args:
        pdf: Normalized rows; columns that are not model fields are ignored.

    Returns:
        A tuple of (list_of_validated_records, bad_count).
    """
    good: list[PayrollRecord] = []
    bad = 0

    for rec in pdf.to_dict(orient="records"):
        try:
            good.append(PayrollRecord.model_validate(row_to_record_input(rec)))
        except ValidationError as e:
            bad += 1
            log.debug("Rejected row for individual_id=%s: %s", rec.get("individual_id"), e)

    return good, bad
