from sqlalchemy.orm import Session

from hrapp.core.config import PACKAGE_DIR
from hrapp.db import RowStore, make_engine
from hrapp.seed import main, read_seed_csv, seed

SEED_DIR = PACKAGE_DIR / "data" / "seed"


def test_read_seed_csv_casts_numeric_columns():
    employees = read_seed_csv(SEED_DIR / "employees.csv")
    assert len(employees) == 3
    assert employees[0]["salary"] == 8000.0
    timesheets = read_seed_csv(SEED_DIR / "timesheets.csv")
    assert [t["employee_id"] for t in timesheets] == [1, 2, 3]


def test_seed_loads_sample_rows(tmp_path):
    db_path = tmp_path / "seeded.sqlite"
    assert seed(str(db_path), SEED_DIR) == {"employees": 3, "timesheets": 3}

    engine = make_engine(f"sqlite:///{db_path}")
    with Session(engine) as session:
        store = RowStore(session)
        rows = store.all(
            "SELECT employees.full_name, timesheets.summary FROM timesheets"
            " JOIN employees ON employees.id = timesheets.employee_id ORDER BY timesheets.id"
        )
    engine.dispose()
    assert rows[0] == {"full_name": "John Doe", "summary": "Worked on backend development"}
    assert rows[2]["full_name"] == "Alice Johnson"


def test_main_cli(tmp_path):
    db_path = tmp_path / "cli.sqlite"
    assert main(["--db", str(db_path), "--data-dir", str(SEED_DIR)]) == 0
    assert db_path.exists()
