#!/usr/bin/env python
"""Pre-deploy check: migrations are current and the clock/report tables carry their constraints."""

from __future__ import annotations

import sys
from pathlib import Path

from alembic import command
from sqlalchemy import inspect

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from timeclock.db import engine  # noqa: E402
from timeclock.migration_runner import build_alembic_config  # noqa: E402

REQUIRED_TABLES = ("users", "active_sessions", "work_sessions", "weekly_reports", "hour_change_requests")


def check_schema(inspector) -> list[str]:
    problems = [f"missing table {name}" for name in REQUIRED_TABLES if not inspector.has_table(name)]
    if problems:
        return problems

    # One open session per user.
    if inspector.get_pk_constraint("active_sessions").get("constrained_columns") != ["user_id"]:
        problems.append("active_sessions must be keyed by user_id")
    # One snapshot per user and week.
    unique_sets = [set(uc["column_names"]) for uc in inspector.get_unique_constraints("weekly_reports")]
    if {"user_id", "week_id"} not in unique_sets:
        problems.append("weekly_reports lacks a (user_id, week_id) unique constraint")
    return problems


def main() -> int:
    try:
        command.current(build_alembic_config())
        problems = check_schema(inspect(engine))
    except Exception as exc:
        print(f"[smoke_test] failure: {exc}", file=sys.stderr)
        return 1
    for problem in problems:
        print(f"[smoke_test] {problem}", file=sys.stderr)
    if problems:
        return 1
    print("[smoke_test] passed", flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
