"""Record loading for the pipeline.

Provides functions to normalize raw payroll rows (dates, pay figures,
cohort flags, tenure), filter rows that cannot be trusted, and validate the
rest into `PayrollRecord` models.
"""
