"""Load the sample employees and timesheets into the SQLite database.

    python -m hrapp.seed [--db PATH] [--data-dir DIR]
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pandas as pd

from hrapp.core.config import get_settings
from hrapp.db import RowStore, create_tables, make_engine
from sqlalchemy.orm import Session

logger = logging.getLogger("seed")

# insertion order matters: timesheets reference employees
SEED_TABLES = ["employees", "timesheets"]

READ_CSV_KW = dict(
    dtype=str,
    keep_default_na=False,
)
NUMERIC_COLUMNS = {"salary": float, "employee_id": int}


def read_seed_csv(path: Path) -> list[dict]:
    df = pd.read_csv(path, **READ_CSV_KW)
    records = df.to_dict(orient="records")
    for record in records:
        for column, cast in NUMERIC_COLUMNS.items():
            if record.get(column, "") != "":
                record[column] = cast(record[column])
    return records


def insert_rows(store: RowStore, table: str, rows: list[dict]) -> int:
    if not rows:
        return 0
    columns = list(rows[0])
    placeholders = ", ".join(f":{c}" for c in columns)
    query = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"
    for row in rows:
        store.run(query, row)
    return len(rows)


def seed(db_path: str, data_dir: Path) -> dict[str, int]:
    engine = make_engine(f"sqlite:///{db_path}")
    create_tables(engine)
    inserted: dict[str, int] = {}
    try:
        with Session(engine) as session:
            store = RowStore(session)
            for table in SEED_TABLES:
                inserted[table] = insert_rows(store, table, read_seed_csv(data_dir / f"{table}.csv"))
                logger.info("seeded_table", extra={"table": table, "rows": inserted[table]})
    finally:
        engine.dispose()
    return inserted


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--db", default=settings.SQLITE_PATH, help="SQLite database file")
    parser.add_argument("--data-dir", type=Path, default=settings.seed_path,
                        help="Directory holding employees.csv and timesheets.csv")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=get_settings().LOG_LEVEL)
    seed(args.db, args.data_dir)
    logger.info("Database seeded successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
