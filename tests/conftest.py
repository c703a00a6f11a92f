from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from hrapp.core.config import Settings, get_settings
from hrapp.db import RowStore, create_tables, get_db, make_engine
from hrapp.main import app

API_KEY = "test-key"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        SQLITE_PATH=str(tmp_path / "test.sqlite"),
        UPLOAD_DIR=str(tmp_path / "uploads"),
        API_KEY=API_KEY,
        ROWS_PER_PAGE=5,
    )


@pytest.fixture
def engine(settings):
    eng = make_engine(settings.sqlalchemy_url)
    create_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine):
    with Session(engine) as session:
        yield RowStore(session)


@pytest.fixture
def client(engine, settings):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


def add_employee(store: RowStore, **overrides) -> int:
    row = {
        "full_name": "John Doe",
        "email": "john.doe@example.com",
        "phone_number": "1234567890",
        "date_of_birth": "1990-01-01",
        "job_title": "Software Engineer",
        "department": "Engineering",
        "salary": 8000.0,
        "photo_path": None,
        "cv_path": None,
    }
    row.update(overrides)
    result = store.run(
        """INSERT INTO employees (
            full_name, email, phone_number, date_of_birth, job_title, department,
            salary, photo_path, cv_path
        ) VALUES (
            :full_name, :email, :phone_number, :date_of_birth, :job_title, :department,
            :salary, :photo_path, :cv_path
        )""",
        row,
    )
    return result.inserted_id


def add_timesheet(store: RowStore, employee_id: int, **overrides) -> int:
    row = {
        "employee_id": employee_id,
        "start_time": "2025-02-10 08:00:00",
        "end_time": "2025-02-10 17:00:00",
        "summary": "Worked on backend development",
    }
    row.update(overrides)
    result = store.run(
        """INSERT INTO timesheets (employee_id, start_time, end_time, summary)
        VALUES (:employee_id, :start_time, :end_time, :summary)""",
        row,
    )
    return result.inserted_id
