"""
Database setup commands.

These commands wrap scripts/setup_database.py.

Usage:
    uv run db-init          # Create tables
    uv run db-reset         # Drop and recreate tables
    uv run db-verify        # Verify connectivity and schema
"""

from __future__ import annotations

import sys
from pathlib import Path

from cli._runner import run

_SCRIPTS_DIR = Path(__file__).parent.parent / "scripts"
_SETUP_DB_SCRIPT = _SCRIPTS_DIR / "setup_database.py"


def _setup_db(*args: str) -> int:
    return run([sys.executable, str(_SETUP_DB_SCRIPT), *args])


def init() -> None:
    """Create the payment tables."""
    sys.exit(_setup_db("init"))


def reset() -> None:
    """Drop and recreate the payment tables."""
    sys.exit(_setup_db("reset", "--yes"))


def verify() -> None:
    """Verify database connectivity and schema."""
    sys.exit(_setup_db("verify"))
