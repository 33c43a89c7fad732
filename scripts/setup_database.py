#!/usr/bin/env python3
"""
Payment Transaction Service: Database Setup Script

Supports:
- init: Create the transaction, description and payment_method tables
- reset: Drop and recreate those tables
- verify: Check DB connectivity and that every table exists

Usage:
    uv run db-init
    uv run db-reset
    uv run db-verify
    python scripts/setup_database.py reset --yes

Environment Variables:
- DATABASE_URL_APP: Full connection URL (preferred)
- DATABASE_HOST / DATABASE_PORT / DATABASE_NAME / DATABASE_USER / DATABASE_PASSWORD
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine

from payment_api.core.config import get_settings
from payment_api.core.database import Base
from payment_api.domain.models import transaction as _models  # noqa: F401  registers tables


@dataclass
class SetupResult:
    """Result of a setup step."""

    success: bool
    message: str
    details: str | None = None


class DatabaseSetup:
    """Handles database setup for the Payment Transaction service."""

    def __init__(self, engine: Engine):
        self.engine = engine

    @property
    def table_names(self) -> list[str]:
        return sorted(Base.metadata.tables)

    def init(self) -> SetupResult:
        Base.metadata.create_all(self.engine)
        return SetupResult(True, "Tables created", ", ".join(self.table_names))

    def reset(self) -> SetupResult:
        Base.metadata.drop_all(self.engine)
        Base.metadata.create_all(self.engine)
        return SetupResult(True, "Tables dropped and recreated", ", ".join(self.table_names))

    def verify(self) -> SetupResult:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        existing = set(inspect(self.engine).get_table_names())
        missing = [name for name in self.table_names if name not in existing]
        if missing:
            return SetupResult(False, "Missing tables", ", ".join(missing))
        return SetupResult(True, "Database reachable and schema present")


def _print_result(result: SetupResult) -> int:
    marker = "OK" if result.success else "FAIL"
    print(f"[{marker}] {result.message}")
    if result.details:
        print(f"       {result.details}")
    return 0 if result.success else 1


def main() -> None:
    parser = argparse.ArgumentParser(description="Payment database setup")
    parser.add_argument("command", choices=["init", "reset", "verify"])
    parser.add_argument("--yes", action="store_true", help="Confirm destructive reset")
    args = parser.parse_args()

    settings = get_settings()
    setup = DatabaseSetup(create_engine(settings.database.sync_url, pool_pre_ping=True))
    if args.command == "reset" and not args.yes:
        print("Refusing to reset without --yes")
        sys.exit(2)
    result = getattr(setup, args.command)()
    sys.exit(_print_result(result))


if __name__ == "__main__":
    main()
