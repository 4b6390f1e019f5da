"""payroll_cohorts package.

Contains modules for reading yearly police payroll tables, normalizing and
validating records, classifying officers into the cohort under study (the
Strategic Response Group) vs. everyone else, and producing aggregate CSV
reports: per-command summaries, rank/tenure breakdowns and year-over-year
pay changes.

Architecture:
- Source tables → normalized records → target-year groupings → reports
- Dask is used for partitioned normalization
- Pydantic models validate the normalized records
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
