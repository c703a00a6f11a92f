"""Field-by-field validation of employee and timesheet submissions.

Each field gets its own chain; all fields are evaluated and only the ones
that failed end up in the returned error map. A fully valid submission
yields ``True``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Literal, Union

import pandas as pd

from hrapp.validation import is_number, parse_datetime, validate

MINIMUM_AGE = 18


@dataclass(frozen=True)
class Invalid:
    errors: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"errors": dict(self.errors)}


ValidationOutcome = Union[Literal[True], Invalid]


def _outcome(candidates: dict[str, str | None]) -> ValidationOutcome:
    errors = {name: message for name, message in candidates.items() if message is not None}
    if errors:
        return Invalid(errors=errors)
    return True


def _minimum_age_rule(today: date):
    def rule(val: Any) -> str | None:
        dob = parse_datetime(val)
        if dob is None:
            return None
        age = today.year - dob.year
        # whole years only, except for the birthday check in the 18th year
        if age < MINIMUM_AGE:
            return "Employee must be at least 18 years old."
        if age == MINIMUM_AGE:
            adult_on = (pd.Timestamp(dob.date()) + pd.DateOffset(years=MINIMUM_AGE)).date()
            if today < adult_on:
                return "Employee must be at least 18 years old."
        return None
    return rule


def _salary_rule(val: Any) -> str | None:
    if not is_number(val) or math.isnan(val) or val <= 0:
        return "Salary must be greater than 0"
    return None


def validate_employee(
    *,
    full_name: Any = None,
    email: Any = None,
    phone_number: Any = None,
    date_of_birth: Any = None,
    job_title: Any = None,
    department: Any = None,
    salary: Any = None,
    cv: Any = None,
    today: date | None = None,
) -> ValidationOutcome:
    today = today or date.today()
    if isinstance(today, datetime):
        today = today.date()
    return _outcome({
        "full_name": validate(full_name)
            .required("Full name is required")
            .validate(),
        "email": validate(email)
            .required("Email is required")
            .email("Invalid email address")
            .validate(),
        "phone_number": validate(phone_number)
            .required("Phone number is required")
            .phone("Invalid phone number")
            .validate(),
        "date_of_birth": validate(date_of_birth)
            .required("Date of Birth is required")
            .date("Invalid date")
            .custom(_minimum_age_rule(today))
            .validate(),
        "job_title": validate(job_title)
            .required("Job title is required")
            .validate(),
        "department": validate(department)
            .required("Department is required")
            .validate(),
        "salary": validate(salary)
            .required("Salary is required")
            .custom(_salary_rule)
            .number()
            .validate(),
        "cv": validate(cv)
            .required("CV is required")
            .validate(),
    })


def validate_timesheet(
    *,
    employee_id: Any = None,
    start_time: Any = None,
    end_time: Any = None,
    summary: Any = None,
) -> ValidationOutcome:
    """Validate a timesheet submission.

    ``summary`` is accepted but not checked; whether it should be required
    is still undecided.
    """
    start = parse_datetime(start_time)
    end = parse_datetime(end_time)

    def starts_before_end(_val):
        if start is not None and end is not None and start >= end:
            return "Start time must be before end time"
        return None

    def ends_after_start(_val):
        if start is not None and end is not None and end <= start:
            return "End time must be after start time"
        return None

    return _outcome({
        "employee_id": validate(employee_id)
            .required("Employee is required")
            .validate(),
        "start_time": validate(start_time)
            .required("Start time is required")
            .custom(starts_before_end)
            .validate(),
        "end_time": validate(end_time)
            .required("End time is required")
            .custom(ends_after_start)
            .validate(),
    })
