#!/usr/bin/env python
"""Create every table straight from the models, without Alembic.

Handy for local SQLite databases. Use `alembic upgrade head` for PostgreSQL.

Usage:
  python scripts/create_tables.py
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from sqlalchemy import inspect

from eventsphere.database import Base, engine
import eventsphere.models  # noqa: F401  registers the tables on Base.metadata


def main():
    Base.metadata.create_all(bind=engine)
    tables = sorted(inspect(engine).get_table_names())
    print(f"Tables ready ({len(tables)}): {', '.join(tables)}")


if __name__ == '__main__':
    main()
