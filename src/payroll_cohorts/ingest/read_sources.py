"""Read yearly payroll source tables.

Each fiscal year is published as `payroll_<year>.csv`. Tables are read as
text so that parsing and validation happen in one place (`clean.transform`).
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

log = logging.getLogger(__name__)


def payroll_source_paths(data_dir: Path, years: list[int]) -> list[Path]:
    """Return the source table path for each fiscal year, in order.

    Args:
        data_dir: Directory holding the yearly CSV files.
        years: Fiscal years to read.
    """
    return [data_dir / f"payroll_{year}.csv" for year in years]


def read_payroll_table(path: Path) -> pd.DataFrame:
    """Read one payroll CSV as a DataFrame of trimmed strings.

    Empty cells stay empty strings rather than NaN so that the transform
    step sees every value as text.

    Args:
        path: Path to a header-bearing CSV file.

    Returns:
        pandas.DataFrame with the file's columns, all of dtype object (str).
    """
    pdf = pd.read_csv(path, dtype=str, keep_default_na=False)
    pdf.columns = [str(c).strip() for c in pdf.columns]
    return pdf.apply(lambda col: col.str.strip())


def read_payroll_tables(paths: list[Path]) -> list[pd.DataFrame]:
    """Read many payroll tables, preserving order.

    Raises:
        FileNotFoundError: if any path does not exist.
    """
    tables: list[pd.DataFrame] = []
    for p in paths:
        if not p.exists():
            raise FileNotFoundError(f"Payroll source not found: {p}")
        pdf = read_payroll_table(p)
        log.info("Read %d rows from %s", len(pdf), p)
        tables.append(pdf)
    return tables
