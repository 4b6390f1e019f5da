"""Command-line interface for orchestrating the pipeline.

Provides subcommands: `commands`, `rank-tenure`, `pay-change`, and `all`.
Each command is implemented as a `cmd_*` function that accepts an argparse
namespace.
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

from dotenv import load_dotenv

from payroll_cohorts.config import Settings, get_settings
from payroll_cohorts.logging_config import configure_logging

# LOAD
from payroll_cohorts.ingest.read_sources import payroll_source_paths, read_payroll_tables
from payroll_cohorts.clean.load_records import LoadResult, load_payroll_records

# AGGREGATE
from payroll_cohorts.aggregate.partition import CohortBreakdown, build_breakdown
from payroll_cohorts.aggregate.pay_change import pay_change_comparison

# REPORT
from payroll_cohorts.report.build_reports import (
    commands_report,
    pay_change_report,
    rank_tenure_report,
)
from payroll_cohorts.report.write_reports import write_report

log = logging.getLogger(__name__)


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _settings_from_args(args: argparse.Namespace) -> Settings:
    """Return environment settings with any command-line overrides applied."""
    s = get_settings()
    overrides = {
        "data_dir": args.data_dir,
        "output_dir": args.output_dir,
        "from_year": args.from_year,
        "to_year": args.to_year,
        "target_year": args.target_year,
    }
    return dataclasses.replace(s, **{k: v for k, v in overrides.items() if v is not None})


def _load(s: Settings) -> LoadResult:
    paths = payroll_source_paths(s.data_dir, s.years)
    return load_payroll_records(read_payroll_tables(paths), s)


def _breakdown(s: Settings, loaded: LoadResult) -> CohortBreakdown:
    return build_breakdown(
        loaded.records,
        loaded.ranks,
        specialized_commands=s.specialized_commands,
        rank_minimum=s.rank_minimum,
        tenure_boundaries=s.tenure_boundaries,
        target_year=s.target_year,
        leave_policy=s.aggregate_leave_policy,
    )


# --------------------------------------------------
# REPORTS
# --------------------------------------------------
def cmd_commands(args: argparse.Namespace) -> None:
    """Write the per-command summary report (`commands.csv`)."""
    s = _settings_from_args(args)
    loaded = _load(s)
    breakdown = _breakdown(s, loaded)
    write_report(commands_report(breakdown, s.empty_group_policy), "commands", s.output_dir)


def cmd_rank_tenure(args: argparse.Namespace) -> None:
    """Write the rank and tenure breakdown report (`rankyear.csv`)."""
    s = _settings_from_args(args)
    loaded = _load(s)
    breakdown = _breakdown(s, loaded)
    write_report(rank_tenure_report(breakdown, s.empty_group_policy), "rankyear", s.output_dir)


def cmd_pay_change(args: argparse.Namespace) -> None:
    """Write the year-over-year pay change comparison (`pay.csv`)."""
    s = _settings_from_args(args)
    loaded = _load(s)
    comparison = pay_change_comparison(loaded.records, s.pay_change_leave_policy)
    write_report(pay_change_report(comparison, s.empty_group_policy), "pay", s.output_dir)


# --------------------------------------------------
# ALL
# --------------------------------------------------
def cmd_all(args: argparse.Namespace) -> None:
    """Convenience: load once and write all three reports."""
    s = _settings_from_args(args)
    loaded = _load(s)
    breakdown = _breakdown(s, loaded)

    write_report(commands_report(breakdown, s.empty_group_policy), "commands", s.output_dir)
    write_report(rank_tenure_report(breakdown, s.empty_group_policy), "rankyear", s.output_dir)

    comparison = pay_change_comparison(loaded.records, s.pay_change_leave_policy)
    write_report(pay_change_report(comparison, s.empty_group_policy), "pay", s.output_dir)

    log.info("All reports generated for fiscal year %d.", breakdown.target_year)


# --------------------------------------------------
# CLI
# --------------------------------------------------
def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--data-dir", type=Path, default=None)
    p.add_argument("--output-dir", type=Path, default=None)
    p.add_argument("--from-year", type=int, default=None)
    p.add_argument("--to-year", type=int, default=None)
    p.add_argument("--target-year", type=int, default=None)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    The returned parser has subcommands `commands`, `rank-tenure`,
    `pay-change`, and `all`. Options left unset fall back to the
    `PAYROLL_*` environment settings.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="payroll_cohorts")
    sub = p.add_subparsers(dest="cmd", required=True)

    for name in ("commands", "rank-tenure", "pay-change", "all"):
        _add_common_args(sub.add_parser(name))

    return p


COMMANDS = {
    "commands": cmd_commands,
    "rank-tenure": cmd_rank_tenure,
    "pay-change": cmd_pay_change,
    "all": cmd_all,
}


def main() -> None:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    load_dotenv()
    configure_logging(Path("logs/pipeline.log"))

    args = build_parser().parse_args()

    handler = COMMANDS.get(args.cmd)
    if handler is None:
        raise SystemExit(2)
    handler(args)


if __name__ == "__main__":
    main()
