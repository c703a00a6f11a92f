"""Sortable, searchable, paginated listing of plain rows.

A ``TableView`` holds the state of one listing screen (search term, sort
column and direction, current page) and recomputes the visible window on
demand: sort, then filter, then paginate.
"""
from __future__ import annotations

import locale
import math
from functools import cmp_to_key
from typing import Any, Callable, Mapping, Protocol, Sequence

from hrapp.schemas import HeaderCell, RenderedRow, SortConfig, TablePage
from hrapp.validation import is_number

Row = Mapping[str, Any]

NO_RESULTS = "No results found"
INDICATORS = {"asc": "▲", "desc": "▼"}
ARIA_SORT = {"asc": "ascending", "desc": "descending"}


class CellRenderer(Protocol):
    def __call__(self, column: str, value: Any, row: Row) -> Any: ...


class ActionRenderer(Protocol):
    def __call__(self, row: Row) -> Any: ...


class FilterRenderer(Protocol):
    def __call__(self) -> Any: ...


def display_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_header(column: str) -> str:
    return " ".join(word.capitalize() for word in column.split("_"))


def compare_values(a: Any, b: Any) -> int:
    a = "" if a is None else a
    b = "" if b is None else b
    if is_number(a) and is_number(b):
        return (a > b) - (a < b)
    result = locale.strcoll(display_text(a), display_text(b))
    return (result > 0) - (result < 0)


def next_sort(current: SortConfig | None, column: str) -> SortConfig:
    """Sort state after a click on ``column``'s header."""
    if current is not None and current.column == column:
        direction = "desc" if current.direction == "asc" else "asc"
        return SortConfig(column=column, direction=direction)
    return SortConfig(column=column, direction="asc")


class TableView:
    def __init__(
        self,
        rows: Sequence[Row],
        columns: Sequence[str],
        *,
        name: str = "table",
        rows_per_page: int = 5,
        current_page: int = 1,
        search_term: str = "",
        sort: SortConfig | None = None,
        row_href: Callable[[Row], str] | None = None,
        add_href: str | None = None,
        render_cell: CellRenderer | None = None,
        render_action: ActionRenderer | None = None,
        render_filters: FilterRenderer | None = None,
    ):
        if rows_per_page < 1:
            raise ValueError("rows_per_page must be >= 1")
        self.rows = list(rows)
        self.columns = list(columns)
        self.name = name
        self.rows_per_page = rows_per_page
        self.row_href = row_href
        self.add_href = add_href
        self.render_cell = render_cell
        self.render_action = render_action
        self.render_filters = render_filters
        self.search_term = search_term or ""
        self.sort = sort
        self.current_page = 1
        self.go_to_page(current_page)

    # -------- state changes --------
    # search and sort leave current_page alone, even when it ends up past the last page

    def search(self, term: str) -> None:
        self.search_term = term or ""

    def sort_by(self, column: str) -> None:
        self.sort = next_sort(self.sort, column)

    def go_to_page(self, page: int) -> None:
        if page < 1:
            raise ValueError("page must be >= 1")
        self.current_page = page

    # -------- pipeline --------

    def sorted_rows(self) -> list[Row]:
        if self.sort is None:
            return list(self.rows)
        column = self.sort.column
        sign = 1 if self.sort.direction == "asc" else -1
        key = cmp_to_key(lambda a, b: sign * compare_values(a.get(column), b.get(column)))
        return sorted(self.rows, key=key)

    def filtered_rows(self) -> list[Row]:
        rows = self.sorted_rows()
        if not self.search_term:
            return rows
        term = self.search_term.lower()
        return [
            row for row in rows
            if any(
                row.get(column) is not None and term in display_text(row.get(column)).lower()
                for column in self.columns
            )
        ]

    @property
    def total_pages(self) -> int:
        return math.ceil(len(self.filtered_rows()) / self.rows_per_page)

    def visible_rows(self) -> list[Row]:
        end = self.current_page * self.rows_per_page
        return self.filtered_rows()[end - self.rows_per_page:end]

    # -------- rendering --------

    def _cell(self, column: str, row: Row) -> Any:
        value = row.get(column)
        if self.render_cell is not None:
            return self.render_cell(column, value, row)
        return value

    def _header(self, column: str) -> HeaderCell:
        active = self.sort is not None and self.sort.column == column
        return HeaderCell(
            column=column,
            label=format_header(column),
            aria_sort=ARIA_SORT[self.sort.direction] if active else "none",
            indicator=INDICATORS[self.sort.direction] if active else None,
            on_click=next_sort(self.sort, column),
        )

    def render(self) -> TablePage:
        filtered = self.filtered_rows()
        total_pages = math.ceil(len(filtered) / self.rows_per_page)
        end = self.current_page * self.rows_per_page
        window = filtered[end - self.rows_per_page:end]
        rows = [
            RenderedRow(
                id=row.get("id"),
                href=self.row_href(row) if self.row_href else None,
                cells=[self._cell(column, row) for column in self.columns],
                action=self.render_action(row) if self.render_action else None,
            )
            for row in window
        ]
        return TablePage(
            title=f"{self.name.capitalize()}s",
            add_label=f"+ Add new {self.name}",
            add_href=self.add_href or f"/{self.name}s/new",
            search=self.search_term,
            sort=self.sort,
            current_page=self.current_page,
            total_pages=total_pages,
            pages=list(range(1, total_pages + 1)),
            headers=[self._header(column) for column in self.columns],
            actions_header="Actions" if self.render_action else None,
            rows=rows,
            placeholder=None if rows else NO_RESULTS,
            colspan=len(self.columns) + (1 if self.render_action else 0),
            filters=self.render_filters() if self.render_filters else None,
        )
