#!/usr/bin/env python3
"""Compare the configured database against the SQLModel tables and report drift"""

import sys
from typing import Dict, List

from sqlalchemy import inspect
from sqlmodel import SQLModel

import tennis_brackets.models  # noqa: F401  registers every table on SQLModel.metadata
from tennis_brackets.database import engine


def find_schema_drift() -> Dict[str, List[str]]:
    """Map each model table to the columns the database lacks.

    A table missing entirely maps to ["*"].
    """
    inspector = inspect(engine)
    existing_tables = set(inspector.get_table_names())

    drift: Dict[str, List[str]] = {}
    for name, table in sorted(SQLModel.metadata.tables.items()):
        if name not in existing_tables:
            drift[name] = ["*"]
            continue
        present = {column["name"] for column in inspector.get_columns(name)}
        missing = [column.name for column in table.columns if column.name not in present]
        if missing:
            drift[name] = missing
    return drift


def main() -> int:
    print(f"Database: {engine.url}")
    drift = find_schema_drift()
    for name in sorted(SQLModel.metadata.tables):
        missing = drift.get(name)
        if missing is None:
            print(f"✓ {name}")
        elif missing == ["*"]:
            print(f"✗ {name} MISSING")
        else:
            print(f"✗ {name} missing columns: {', '.join(missing)}")

    if drift:
        print("Schema is behind the models. Run: alembic upgrade head")
        return 1
    print("Schema matches the models.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
