import math

import pytest

from hrapp.validation import EMAIL_MESSAGE, PHONE_MESSAGE, parse_datetime, validate


def test_empty_chain_always_passes():
    assert validate("anything").validate() is None
    assert validate(None).validate() is None


@pytest.mark.parametrize("value", [None, ""])
def test_required_fails_on_missing_values(value):
    assert validate(value).required("Name is required").validate() == "Name is required"


@pytest.mark.parametrize("value", [0, False, " x ", 0.0])
def test_required_accepts_falsy_but_present_values(value):
    assert validate(value).required().validate() is None


def test_required_default_message():
    assert validate(None).required().validate() == "This field is required"


def test_email_format():
    assert validate("a@b.com").email().validate() is None
    for bad in ["a@b", "a.com", "", "a b@c.com", "a@b.com\n"]:
        assert validate(bad).email().validate() == EMAIL_MESSAGE


def test_email_message_is_fixed():
    assert validate("nope").email("Custom message").validate() == EMAIL_MESSAGE


def test_phone_format():
    assert validate("12345678").phone().validate() is None
    assert validate("123456789012345").phone().validate() is None
    assert validate("123-456-7890").phone("ignored").validate() == PHONE_MESSAGE
    assert validate("1234567").phone().validate() == PHONE_MESSAGE
    assert validate("1234567890123456").phone().validate() == PHONE_MESSAGE
    # non-ASCII digits are not phone digits
    assert validate("١٢٣٤٥٦٧٨").phone().validate() == PHONE_MESSAGE


def test_min_and_max_embed_bound_in_default_message():
    assert validate(3).min(5).validate() == "Value must be at least 5"
    assert validate(5).min(5).validate() is None
    assert validate(11).max(10).validate() == "Value must be at most 10"
    assert validate(11).max(10, "Too big").validate() == "Too big"


def test_date_rule():
    assert validate("2024-02-29").date().validate() is None
    assert validate("2025-02-10 08:00:00").date().validate() is None
    assert validate("2023-02-29").date().validate() == "Invalid date"
    assert validate("not a date").date("Bad date").validate() == "Bad date"
    assert validate(None).date().validate() == "Invalid date"


def test_number_rule():
    assert validate(5).number().validate() is None
    assert validate(2.5).number().validate() is None
    assert validate("5").number().validate() == "Value must be a number"
    assert validate(math.nan).number().validate() == "Value must be a number"
    assert validate(True).number().validate() == "Value must be a number"


def test_sign_rules():
    assert validate(1).positive().validate() is None
    assert validate(0).positive().validate() == "Value must be a positive number"
    assert validate("1").positive().validate() == "Value must be a positive number"
    assert validate(-1).negative().validate() is None
    assert validate(0).negative().validate() == "Value must be a negative number"


def test_integer_rule():
    assert validate(3).integer().validate() is None
    assert validate(3.0).integer().validate() is None
    assert validate(3.5).integer().validate() == "Value must be an integer"
    assert validate("3").integer().validate() == "Value must be an integer"


def test_custom_receives_bound_value():
    seen = []
    validate("payload").custom(lambda v: seen.append(v)).validate()
    assert seen == ["payload"]


def test_first_failure_wins_and_later_rules_do_not_run():
    calls = []

    def later(v):
        calls.append(v)
        return "later"

    error = validate("").required("first").custom(later).validate()
    assert error == "first"
    assert calls == []


def test_empty_message_counts_as_pass():
    assert validate("x").custom(lambda v: "").custom(lambda v: "second").validate() == "second"


def test_builder_returns_same_chain():
    chain = validate("x")
    assert chain.required() is chain
    assert chain.custom(lambda v: None) is chain


def test_chains_do_not_share_rules():
    first = validate("").required()
    second = validate("")
    assert first.validate() == "This field is required"
    assert second.validate() is None
    assert second.rules == []


def test_parse_datetime_accepts_datetime_local_and_rejects_blank():
    assert parse_datetime("2025-02-10T08:00").hour == 8
    assert parse_datetime("2025-02-10T08:00:00Z").tzinfo is None
    assert parse_datetime("") is None
    assert parse_datetime("   ") is None


def test_parse_datetime_converts_offsets_to_utc():
    assert parse_datetime("2025-02-10T10:00:00+02:00") == parse_datetime("2025-02-10T08:00:00")
