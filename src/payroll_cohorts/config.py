"""Configuration helpers and Settings container.

This module provides a frozen `Settings` dataclass and `get_settings`, which
reads `PAYROLL_*` environment variables (optionally from a `.env` file at the
project root) and validates them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
import os

from dotenv import load_dotenv

from payroll_cohorts.commands import COHORT_COMMANDS, SPECIALIZED_COMMANDS
from payroll_cohorts.models import EmptyGroupPolicy, LeavePolicy

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_AS_OF_DATE = date(2021, 11, 30)  # date the officer profiles were pulled
DEFAULT_TENURE_BOUNDARIES = (5, 10, 15, 20, 25, 30)


@dataclass(frozen=True)
class Settings:
    """Container for pipeline configuration read from the environment.

    Attributes:
        data_dir: Directory holding `payroll_<year>.csv` source tables.
        output_dir: Directory reports are written to.
        from_year: First fiscal year to read.
        to_year: Last fiscal year to read (inclusive).
        as_of_date: Reference date for tenure.
        target_year: Fiscal year for cross-sectional reports; None means the
            latest year present in the data.
        rank_minimum: A rank is broken out only when its cohort population
            in the target year is strictly greater than this.
        tenure_boundaries: Upper bounds of the tenure buckets, ascending.
        executive_rank_prefix: Ranks starting with this are not broken out.
        date_format: strptime format of source dates.
        aggregate_leave_policy: Leave statuses included in aggregate reports.
        pay_change_leave_policy: Leave statuses included in pay changes.
        empty_group_policy: How reports render groups with no records.
        strict_numeric: Raise on unparseable pay figures instead of dropping.
        cohort_commands: Commands that make up the cohort.
        specialized_commands: Secondary comparison commands.
    """
    data_dir: Path
    output_dir: Path
    from_year: int = 2014
    to_year: int = 2021
    as_of_date: date = DEFAULT_AS_OF_DATE
    target_year: int | None = None
    rank_minimum: int = 5
    tenure_boundaries: tuple[int, ...] = DEFAULT_TENURE_BOUNDARIES
    executive_rank_prefix: str = "CHIEF OF"
    date_format: str = "%m/%d/%Y"
    aggregate_leave_policy: LeavePolicy = LeavePolicy.ALL
    pay_change_leave_policy: LeavePolicy = LeavePolicy.ALL
    empty_group_policy: EmptyGroupPolicy = EmptyGroupPolicy.PLACEHOLDER
    strict_numeric: bool = False
    cohort_commands: tuple[str, ...] = COHORT_COMMANDS
    specialized_commands: tuple[str, ...] = SPECIALIZED_COMMANDS

    @property
    def years(self) -> list[int]:
        """Fiscal years whose source tables are read, in order."""
        return list(range(self.from_year, self.to_year + 1))


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise RuntimeError(f"{name} must be a boolean, got {raw!r}")


def _env_choice(name: str, enum_cls: type, default: object) -> object:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    try:
        return enum_cls(raw)
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise RuntimeError(f"{name} must be one of: {choices} (got {raw!r})") from None


def _env_boundaries(name: str) -> tuple[int, ...]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return DEFAULT_TENURE_BOUNDARIES
    try:
        bounds = tuple(int(part) for part in raw.split(",") if part.strip())
    except ValueError:
        raise RuntimeError(f"{name} must be comma-separated integers, got {raw!r}") from None
    if not bounds or any(b <= a for a, b in zip(bounds, bounds[1:])) or bounds[0] <= 0:
        raise RuntimeError(f"{name} must be positive and strictly increasing, got {raw!r}")
    return bounds


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if any variable is set to an invalid value.
    """
    as_of_raw = os.getenv("PAYROLL_AS_OF_DATE", "").strip()
    try:
        as_of_date = date.fromisoformat(as_of_raw) if as_of_raw else DEFAULT_AS_OF_DATE
    except ValueError:
        raise RuntimeError(
            f"PAYROLL_AS_OF_DATE must be an ISO date (YYYY-MM-DD), got {as_of_raw!r}"
        ) from None

    from_year = _env_int("PAYROLL_FROM_YEAR", 2014)
    to_year = _env_int("PAYROLL_TO_YEAR", 2021)
    if from_year > to_year:
        raise RuntimeError(
            f"PAYROLL_FROM_YEAR ({from_year}) must not be after PAYROLL_TO_YEAR ({to_year})"
        )

    return Settings(
        data_dir=Path(os.getenv("PAYROLL_DATA_DIR", "data")),
        output_dir=Path(os.getenv("PAYROLL_OUTPUT_DIR", "output")),
        from_year=from_year,
        to_year=to_year,
        as_of_date=as_of_date,
        target_year=_env_int("PAYROLL_TARGET_YEAR", None),
        rank_minimum=_env_int("PAYROLL_RANK_MINIMUM", 5),
        tenure_boundaries=_env_boundaries("PAYROLL_TENURE_BOUNDARIES"),
        executive_rank_prefix=os.getenv("PAYROLL_EXECUTIVE_RANK_PREFIX", "CHIEF OF"),
        date_format=os.getenv("PAYROLL_DATE_FORMAT", "%m/%d/%Y"),
        aggregate_leave_policy=_env_choice(
            "PAYROLL_AGGREGATE_LEAVE_POLICY", LeavePolicy, LeavePolicy.ALL
        ),
        pay_change_leave_policy=_env_choice(
            "PAYROLL_PAY_CHANGE_LEAVE_POLICY", LeavePolicy, LeavePolicy.ALL
        ),
        empty_group_policy=_env_choice(
            "PAYROLL_EMPTY_GROUP_POLICY", EmptyGroupPolicy, EmptyGroupPolicy.PLACEHOLDER
        ),
        strict_numeric=_env_bool("PAYROLL_STRICT_NUMERIC", False),
    )
