#!/usr/bin/env python
"""Launch the timeclock API under Uvicorn.

When RUN_DB_MIGRATIONS=1 the schema is upgraded to head first.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

logger = logging.getLogger("runserver")


def _maybe_run_migrations() -> None:
    if os.getenv("RUN_DB_MIGRATIONS") != "1":
        return
    from timeclock.migration_runner import run_migrations_once

    logger.info("RUN_DB_MIGRATIONS=1 detected. Applying migrations...")
    run_migrations_once()


def _server_command() -> list[str]:
    configured = os.getenv("RUNSERVER_CMD")
    if configured:
        return shlex.split(configured)
    return [
        "uvicorn",
        "timeclock.main:app",
        "--host",
        os.getenv("HOST", "0.0.0.0"),
        "--port",
        os.getenv("PORT", "8000"),
    ]


def main() -> int:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"), format="[%(name)s] %(levelname)s %(message)s")
    try:
        _maybe_run_migrations()
        command = _server_command()
        logger.info("Starting server: %s", " ".join(command))
        subprocess.run(command, check=True, cwd=PROJECT_ROOT)
    except subprocess.CalledProcessError as exc:
        logger.error("command failed: %s", exc)
        return exc.returncode or 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
