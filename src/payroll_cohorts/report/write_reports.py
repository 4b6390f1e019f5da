"""Write report tables as header-bearing CSV files."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

log = logging.getLogger(__name__)


def write_report(pdf: pd.DataFrame, name: str, output_dir: Path) -> Path:
    """Write one report to `<output_dir>/<name>.csv`.

    The file always has a header row, even when the report has no rows.

    Args:
        pdf: Report table.
        name: Report name, used as the file stem.
        output_dir: Destination directory (created if missing).

    Returns:
        Path of the written file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{name}.csv"

    log.info("Writing report: %s", name)
    if pdf.empty:
        log.warning("No rows to write for %s", name)

    pdf.to_csv(path, index=False)
    log.info("Report written to %s: %d rows", path, len(pdf))
    return path
