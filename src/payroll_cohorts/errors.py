"""Exceptions raised by the payroll pipeline.

Row-level problems (missing fiscal year, appointment after the fiscal year,
unparseable pay figures) are normally counted and dropped by the loader, not
raised. The exceptions below cover the conditions callers must handle.
"""

from __future__ import annotations


class PayrollPipelineError(Exception):
    """Base class for pipeline errors."""


class MissingColumnsError(PayrollPipelineError, ValueError):
    """A source table lacks one or more required columns."""

    def __init__(self, missing: list[str], source: str | None = None) -> None:
        self.missing = missing
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Missing required columns{where}: {', '.join(missing)}")


class NoSourceRowsError(PayrollPipelineError, RuntimeError):
    """No payroll rows were supplied at all."""


class MalformedRowError(PayrollPipelineError, ValueError):
    """A row has pay figures that cannot be parsed (strict mode only)."""


class EmptyGroupError(PayrollPipelineError, ValueError):
    """An average was requested over a group with no records."""

    def __init__(self, field: str, group: str | None = None) -> None:
        self.field = field
        self.group = group
        label = f" for group '{group}'" if group else ""
        super().__init__(f"Mean of '{field}' is undefined{label}: group has no records")
