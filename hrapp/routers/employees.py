import logging
import math
from typing import Literal

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

from hrapp.core.config import Settings, get_settings
from hrapp.db import RowStore, get_store
from hrapp.schemas import SortConfig, TablePage
from hrapp.storage import (
    CV_FILENAME, PHOTO_FILENAME, discard_uploads, has_content, replace_upload, save_upload,
)
from hrapp.table import TableView
from hrapp.validators import validate_employee

router = APIRouter()
logger = logging.getLogger("employees")
logger.setLevel(logging.INFO)

LIST_COLUMNS = ["full_name", "email", "phone_number", "job_title", "department"]
FORM_FIELDS = [
    "full_name", "email", "phone_number", "date_of_birth",
    "job_title", "department", "salary", "photo", "cv",
]

# -------- helpers --------

def _parse_salary(raw: str | None) -> float | None:
    """Blank -> None (required check), unparseable -> NaN."""
    if raw is None or not str(raw).strip():
        return None
    try:
        return float(raw)
    except ValueError:
        return math.nan

def _render_cell(column, value, row):
    if column == "salary" and value is not None:
        return f"${value:,.0f}" if float(value).is_integer() else f"${value:,}"
    return value

def _validation_failed(outcome, record_id=None) -> JSONResponse:
    logger.info("validation_failed", extra={
        "table": "employees", "record_id": record_id, "fields": sorted(outcome.errors),
    })
    return JSONResponse(status_code=422, content=outcome.to_dict())

def _submission_failed(action: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": f"Failed to {action} employee. Please try again."},
    )

def _discard_employee(store: RowStore, settings: Settings, employee_id: int) -> None:
    """Undo a half-finished create: uploaded files first, then the row."""
    discard_uploads(settings.upload_path, employee_id)
    try:
        store.run("DELETE FROM employees WHERE id = :id", {"id": employee_id})
    except SQLAlchemyError:
        logger.exception("cleanup_failed", extra={"table": "employees", "record_id": employee_id})

# -------- listing --------

@router.get("/employees", tags=["Employees"], summary="Employee listing", response_model=TablePage)
def list_employees(
    search: str = "",
    sort: str | None = None,
    order: Literal["asc", "desc"] = "asc",
    page: int = Query(1, ge=1),
    store: RowStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    if sort is not None and sort not in LIST_COLUMNS:
        raise HTTPException(status_code=422, detail=f"Cannot sort by {sort!r}")
    employees = store.all("SELECT * FROM employees")
    view = TableView(
        employees,
        LIST_COLUMNS,
        name="employee",
        rows_per_page=settings.ROWS_PER_PAGE,
        current_page=page,
        search_term=search,
        sort=SortConfig(column=sort, direction=order) if sort else None,
        row_href=lambda row: f"/employees/{row['id']}",
        render_cell=_render_cell,
    )
    return view.render()

# -------- create --------

@router.get("/employees/new", tags=["Employees"], summary="Empty employee form")
def new_employee_form():
    return {"mode": "create", "fields": FORM_FIELDS, "employee": None}

@router.post("/employees/new", tags=["Employees"], summary="Create employee (multipart)")
def create_employee(
    full_name: str | None = Form(None),
    email: str | None = Form(None),
    phone_number: str | None = Form(None),
    date_of_birth: str | None = Form(None),
    job_title: str | None = Form(None),
    department: str | None = Form(None),
    salary: str | None = Form(None),
    photo: UploadFile | None = File(None),
    cv: UploadFile | None = File(None),
    store: RowStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    fields = dict(
        full_name=full_name,
        email=email,
        phone_number=phone_number,
        date_of_birth=date_of_birth,
        job_title=job_title,
        department=department,
        salary=_parse_salary(salary),
    )
    outcome = validate_employee(**fields, cv=cv.filename if cv is not None else None)
    if outcome is not True:
        return _validation_failed(outcome)

    employee_id = None
    try:
        result = store.run(
            """INSERT INTO employees (
                full_name, email, phone_number, date_of_birth, job_title, department, salary
            ) VALUES (
                :full_name, :email, :phone_number, :date_of_birth, :job_title, :department, :salary
            )""",
            fields,
        )
        employee_id = result.inserted_id
        photo_path = (
            save_upload(settings.upload_path, employee_id, photo, PHOTO_FILENAME)
            if has_content(photo) else None
        )
        cv_path = save_upload(settings.upload_path, employee_id, cv, CV_FILENAME)
        store.run(
            "UPDATE employees SET photo_path = :photo_path, cv_path = :cv_path WHERE id = :id",
            {"photo_path": photo_path, "cv_path": cv_path, "id": employee_id},
        )
    except (SQLAlchemyError, OSError):
        logger.exception("create_failed", extra={"table": "employees", "record_id": employee_id})
        if employee_id is not None:
            _discard_employee(store, settings, employee_id)
        return _submission_failed("create")

    logger.info("employee_created", extra={"table": "employees", "record_id": employee_id})
    return RedirectResponse(url="/employees", status_code=status.HTTP_303_SEE_OTHER)

# -------- detail / update --------

@router.get("/employees/{employee_id}", tags=["Employees"], summary="Employee form data")
def get_employee(employee_id: int, store: RowStore = Depends(get_store)):
    employee = store.get("SELECT * FROM employees WHERE id = :id", {"id": employee_id})
    return {"mode": "update", "fields": FORM_FIELDS, "employee": employee}

@router.post("/employees/{employee_id}", tags=["Employees"], summary="Update employee (multipart)")
def update_employee(
    employee_id: int,
    full_name: str | None = Form(None),
    email: str | None = Form(None),
    phone_number: str | None = Form(None),
    date_of_birth: str | None = Form(None),
    job_title: str | None = Form(None),
    department: str | None = Form(None),
    salary: str | None = Form(None),
    photo: UploadFile | None = File(None),
    cv: UploadFile | None = File(None),
    store: RowStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    employee = store.get("SELECT * FROM employees WHERE id = :id", {"id": employee_id})
    if not employee:
        raise LookupError("Employee not found")

    fields = dict(
        full_name=full_name,
        email=email,
        phone_number=phone_number,
        date_of_birth=date_of_birth,
        job_title=job_title,
        department=department,
        salary=_parse_salary(salary),
    )
    # a CV already on file satisfies the requirement
    cv_name = cv.filename if has_content(cv) else employee["cv_path"]
    outcome = validate_employee(**fields, cv=cv_name)
    if outcome is not True:
        return _validation_failed(outcome, record_id=employee_id)

    try:
        photo_path = employee["photo_path"]
        cv_path = employee["cv_path"]
        if has_content(photo):
            photo_path = replace_upload(settings.upload_path, employee_id, photo, PHOTO_FILENAME, photo_path)
        if has_content(cv):
            cv_path = replace_upload(settings.upload_path, employee_id, cv, CV_FILENAME, cv_path)
        store.run(
            """UPDATE employees SET
                full_name = :full_name, email = :email, phone_number = :phone_number,
                date_of_birth = :date_of_birth, job_title = :job_title,
                department = :department, salary = :salary,
                photo_path = :photo_path, cv_path = :cv_path
            WHERE id = :id""",
            {**fields, "photo_path": photo_path, "cv_path": cv_path, "id": employee_id},
        )
    except (SQLAlchemyError, OSError):
        logger.exception("update_failed", extra={"table": "employees", "record_id": employee_id})
        return _submission_failed("update")

    logger.info("employee_updated", extra={"table": "employees", "record_id": employee_id})
    return RedirectResponse(url="/employees", status_code=status.HTTP_303_SEE_OTHER)
