from typing import Any, Literal
from pydantic import BaseModel, ConfigDict, Field

Direction = Literal["asc", "desc"]

class SortConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    column: str = Field(min_length=1)
    direction: Direction = "asc"

class HeaderCell(BaseModel):
    column: str
    label: str
    aria_sort: Literal["ascending", "descending", "none"] = "none"
    indicator: str | None = None
    # sort state produced by clicking this header
    on_click: SortConfig

class RenderedRow(BaseModel):
    id: Any = None
    href: str | None = None
    cells: list[Any]
    action: Any = None

class TablePage(BaseModel):
    title: str
    add_label: str
    add_href: str
    search: str = ""
    sort: SortConfig | None = None
    current_page: int
    total_pages: int
    pages: list[int]
    headers: list[HeaderCell]
    actions_header: str | None = None
    rows: list[RenderedRow]
    placeholder: str | None = None
    colspan: int
    filters: Any = None

class CalendarEvent(BaseModel):
    id: Any
    title: str | None
    start: str
    end: str

class CalendarView(BaseModel):
    view: Literal["calendar"] = "calendar"
    events: list[CalendarEvent]
    filters: Any = None
