"""Chainable single-value validation.

``validate(value)`` starts an empty rule chain bound to ``value``. Every
builder method appends one rule and hands back the same chain, so rules
read left to right in the order they run::

    error = validate(email).required("Email is required").email().validate()

``ValidationChain.validate`` returns the first failing rule's message, or
``None`` when every rule passes (an empty chain always passes).
"""
from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional

import pandas as pd

ValidationRule = Callable[[Any], Optional[str]]

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_RE = re.compile(r"\d{8,15}", re.ASCII)

EMAIL_MESSAGE = "Email should be in form example@example.com"
PHONE_MESSAGE = "Phone number have to be 8 number at least"


def is_number(value: Any) -> bool:
    """True for real numeric values (bools excluded), NaN included."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_number(value: Any) -> float | None:
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def parse_datetime(value: Any) -> datetime | None:
    """Parse a submitted date or date-time; None when it is not a valid date."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _as_utc_naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    s = str(value).strip()
    if not s:
        return None
    try:
        parsed = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        ts = pd.to_datetime(s, errors="coerce")
        if pd.isna(ts):
            return None
        parsed = ts.to_pydatetime()
    return _as_utc_naive(parsed)


def _as_utc_naive(value: datetime) -> datetime:
    # offset-bearing times are compared as UTC instants
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class ValidationChain:
    def __init__(self, value: Any):
        self.value = value
        self.rules: list[ValidationRule] = []

    def required(self, message: str = "This field is required") -> ValidationChain:
        self.rules.append(lambda val: message if val is None or val == "" else None)
        return self

    def email(self, message: str = "Invalid email address") -> ValidationChain:
        # ``message`` is ignored, the format message is fixed
        def rule(val):
            return None if EMAIL_RE.fullmatch(_as_text(val)) else EMAIL_MESSAGE
        self.rules.append(rule)
        return self

    def phone(self, message: str = "Invalid phone number") -> ValidationChain:
        def rule(val):
            return None if PHONE_RE.fullmatch(_as_text(val)) else PHONE_MESSAGE
        self.rules.append(rule)
        return self

    def min(self, min_value: float, message: str | None = None) -> ValidationChain:
        if message is None:
            message = f"Value must be at least {min_value}"

        def rule(val):
            number = to_number(val)
            return message if number is not None and number < min_value else None
        self.rules.append(rule)
        return self

    def max(self, max_value: float, message: str | None = None) -> ValidationChain:
        if message is None:
            message = f"Value must be at most {max_value}"

        def rule(val):
            number = to_number(val)
            return message if number is not None and number > max_value else None
        self.rules.append(rule)
        return self

    def date(self, message: str = "Invalid date") -> ValidationChain:
        self.rules.append(lambda val: message if parse_datetime(val) is None else None)
        return self

    def number(self, message: str = "Value must be a number") -> ValidationChain:
        self.rules.append(
            lambda val: message if not is_number(val) or math.isnan(val) else None
        )
        return self

    def positive(self, message: str = "Value must be a positive number") -> ValidationChain:
        self.rules.append(lambda val: message if not is_number(val) or not val > 0 else None)
        return self

    def negative(self, message: str = "Value must be a negative number") -> ValidationChain:
        self.rules.append(lambda val: message if not is_number(val) or not val < 0 else None)
        return self

    def integer(self, message: str = "Value must be an integer") -> ValidationChain:
        def rule(val):
            if not is_number(val):
                return message
            if isinstance(val, float) and not val.is_integer():
                return message
            return None
        self.rules.append(rule)
        return self

    def custom(self, rule: ValidationRule) -> ValidationChain:
        """Append an arbitrary rule; it gets the bound value and returns a message or None."""
        self.rules.append(rule)
        return self

    def validate(self) -> str | None:
        for rule in self.rules:
            error = rule(self.value)
            if error:
                return error
        return None


def validate(value: Any) -> ValidationChain:
    return ValidationChain(value)


def _as_text(val: Any) -> str:
    if val is None:
        return ""
    return val if isinstance(val, str) else str(val)
