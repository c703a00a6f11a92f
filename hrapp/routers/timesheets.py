import logging
from typing import Literal

from fastapi import APIRouter, Depends, Form, HTTPException, Query, status
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

from hrapp.core.config import Settings, get_settings
from hrapp.db import RowStore, get_store
from hrapp.schemas import CalendarEvent, CalendarView, SortConfig, TablePage
from hrapp.table import TableView
from hrapp.validation import parse_datetime
from hrapp.validators import validate_timesheet

router = APIRouter()
logger = logging.getLogger("timesheets")
logger.setLevel(logging.INFO)

LIST_COLUMNS = ["full_name", "start_time", "end_time", "summary"]
DISPLAY_FORMAT = "%Y-%m-%d %H:%M"
ALL_EMPLOYEES = "all"

LIST_QUERY = """
    SELECT timesheets.id, timesheets.employee_id, timesheets.start_time,
           timesheets.end_time, timesheets.summary, employees.full_name
    FROM timesheets
    JOIN employees ON timesheets.employee_id = employees.id
"""

# -------- helpers --------

def format_time(value) -> str | None:
    parsed = parse_datetime(value)
    if parsed is None:
        return value
    return parsed.strftime(DISPLAY_FORMAT)

def _render_cell(column, value, row):
    if column in ("start_time", "end_time"):
        return format_time(value)
    return value

def _employee_options(rows: list[dict], selected: str) -> dict:
    names = list(dict.fromkeys(r["full_name"] for r in rows))
    return {
        "name": "employee",
        "type": "select",
        "value": selected,
        "options": [{"value": ALL_EMPLOYEES, "label": "All Employees"}]
                   + [{"value": n, "label": n} for n in names],
    }

def _employees(store: RowStore) -> list[dict]:
    return store.all("SELECT id, full_name FROM employees")

def _validation_failed(outcome, record_id=None) -> JSONResponse:
    logger.info("validation_failed", extra={
        "table": "timesheets", "record_id": record_id, "fields": sorted(outcome.errors),
    })
    return JSONResponse(status_code=422, content=outcome.to_dict())

def _submission_failed(action: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": f"Failed to {action} timesheet. Please try again."},
    )

# -------- listing --------

@router.get(
    "/timesheets",
    tags=["Timesheets"],
    summary="Timesheet listing (table or calendar)",
    response_model=TablePage | CalendarView,
)
def list_timesheets(
    view: Literal["table", "calendar"] = "table",
    employee: str = ALL_EMPLOYEES,
    search: str = "",
    sort: str | None = None,
    order: Literal["asc", "desc"] = "asc",
    page: int = Query(1, ge=1),
    store: RowStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    if sort is not None and sort not in LIST_COLUMNS:
        raise HTTPException(status_code=422, detail=f"Cannot sort by {sort!r}")
    rows = store.all(LIST_QUERY)
    selected = [r for r in rows if employee == ALL_EMPLOYEES or r["full_name"] == employee]
    filters = _employee_options(rows, employee)

    if view == "calendar":
        events = [
            CalendarEvent(
                id=r["id"],
                title=r["full_name"],
                start=format_time(r["start_time"]),
                end=format_time(r["end_time"]),
            )
            for r in selected
        ]
        return CalendarView(events=events, filters=filters)

    table = TableView(
        selected,
        LIST_COLUMNS,
        name="timesheet",
        rows_per_page=settings.ROWS_PER_PAGE,
        current_page=page,
        search_term=search,
        sort=SortConfig(column=sort, direction=order) if sort else None,
        row_href=lambda row: f"/timesheets/{row['id']}",
        render_cell=_render_cell,
        render_filters=lambda: filters,
    )
    return table.render()

# -------- create --------

@router.get("/timesheets/new", tags=["Timesheets"], summary="Empty timesheet form")
def new_timesheet_form(store: RowStore = Depends(get_store)):
    return {"mode": "create", "employees": _employees(store), "timesheet": None}

@router.post("/timesheets/new", tags=["Timesheets"], summary="Create timesheet")
def create_timesheet(
    employee_id: str | None = Form(None),
    start_time: str | None = Form(None),
    end_time: str | None = Form(None),
    summary: str | None = Form(None),
    store: RowStore = Depends(get_store),
):
    fields = dict(employee_id=employee_id, start_time=start_time, end_time=end_time, summary=summary)
    outcome = validate_timesheet(**fields)
    if outcome is not True:
        return _validation_failed(outcome)

    try:
        result = store.run(
            """INSERT INTO timesheets (employee_id, start_time, end_time, summary)
            VALUES (:employee_id, :start_time, :end_time, :summary)""",
            fields,
        )
    except SQLAlchemyError:
        logger.exception("create_failed", extra={"table": "timesheets"})
        return _submission_failed("create")

    logger.info("timesheet_created", extra={"table": "timesheets", "record_id": result.inserted_id})
    return RedirectResponse(url="/timesheets", status_code=status.HTTP_303_SEE_OTHER)

# -------- detail / update --------

@router.get("/timesheets/{timesheet_id}", tags=["Timesheets"], summary="Timesheet form data")
def get_timesheet(timesheet_id: int, store: RowStore = Depends(get_store)):
    timesheet = store.get("SELECT * FROM timesheets WHERE id = :id", {"id": timesheet_id})
    return {"mode": "update", "employees": _employees(store), "timesheet": timesheet}

@router.post("/timesheets/{timesheet_id}", tags=["Timesheets"], summary="Update timesheet")
def update_timesheet(
    timesheet_id: int,
    employee_id: str | None = Form(None),
    start_time: str | None = Form(None),
    end_time: str | None = Form(None),
    summary: str | None = Form(None),
    store: RowStore = Depends(get_store),
):
    if store.get("SELECT id FROM timesheets WHERE id = :id", {"id": timesheet_id}) is None:
        raise LookupError("Timesheet not found")

    fields = dict(employee_id=employee_id, start_time=start_time, end_time=end_time, summary=summary)
    outcome = validate_timesheet(**fields)
    if outcome is not True:
        return _validation_failed(outcome, record_id=timesheet_id)

    try:
        store.run(
            """UPDATE timesheets SET
                employee_id = :employee_id, start_time = :start_time,
                end_time = :end_time, summary = :summary
            WHERE id = :id""",
            {**fields, "id": timesheet_id},
        )
    except SQLAlchemyError:
        logger.exception("update_failed", extra={"table": "timesheets", "record_id": timesheet_id})
        return _submission_failed("update")

    logger.info("timesheet_updated", extra={"table": "timesheets", "record_id": timesheet_id})
    return RedirectResponse(url="/timesheets", status_code=status.HTTP_303_SEE_OTHER)
