"""Serverless entrypoint: exposes the FastAPI application as ``app``."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from timeclock.migration_runner import run_migrations_once  # noqa: E402

run_migrations_once()

from timeclock.main import app  # noqa: E402,F401
