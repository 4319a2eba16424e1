"""Tests for the shared field validators."""

from datetime import date

import pytest

from inkind_app.utils.validators import (
    ALLOWED_GL_CODES,
    ValidationError,
    normalize_bool,
    normalize_optional_email,
    normalize_optional_zip,
    parse_money,
    validate_amount,
    validate_choice,
    validate_code,
    validate_date,
    validate_gl_acct,
    validate_optional_code,
    validate_optional_email,
    validate_optional_id,
    validate_optional_state,
    validate_optional_string,
    validate_optional_zip,
    validate_quantity,
    validate_required_string,
)


class TestGLAccount:
    def test_accepts_exactly_the_allowed_codes(self):
        assert set(ALLOWED_GL_CODES) == {"7601", "7604", "7606", "7607", "7101", "7301", "7404", "7380"}
        for code in ALLOWED_GL_CODES:
            assert validate_gl_acct(code) == code

    def test_trims_and_accepts_integers(self):
        assert validate_gl_acct(" 7380 ") == "7380"
        assert validate_gl_acct(7601) == "7601"

    @pytest.mark.parametrize(
        "value, message",
        [
            (None, "gl_acct is required."),
            ("", "gl_acct is required."),
            ("76O1", "gl_acct must be exactly 4 digits."),
            ("76011", "gl_acct must be exactly 4 digits."),
            ("7602", "gl_acct must be one of the allowed GL codes."),
        ],
    )
    def test_rejects_invalid_codes(self, value, message):
        with pytest.raises(ValidationError, match=message):
            validate_gl_acct(value)


class TestParseMoney:
    def test_extracts_first_number_and_drops_thousands_separators(self):
        assert parse_money("$1,234.50") == 1234.5
        assert parse_money("about 12 lbs of rice") == 12.0

    def test_ungrouped_numbers_match_first_three_digits(self):
        assert parse_money("1234.50") == 123.0
        assert parse_money("1500") == 150.0
        assert parse_money("999.99") == 999.99

    def test_negative_values(self):
        assert parse_money("-5") == -5.0

    def test_blank_or_numberless_text_is_none(self):
        assert parse_money("") is None
        assert parse_money(None) is None
        assert parse_money("abc") is None


class TestDate:
    def test_iso_and_us_formats(self):
        assert validate_date("2024-01-15") == date(2024, 1, 15)
        assert validate_date("01/15/2024") == date(2024, 1, 15)

    def test_date_objects_pass_through(self):
        assert validate_date(date(2023, 12, 31)) == date(2023, 12, 31)

    def test_required(self):
        with pytest.raises(ValidationError, match="date_received is required."):
            validate_date("")

    @pytest.mark.parametrize("value", ["not a date", "2024-02-30"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError, match="date_received must be a valid date."):
            validate_date(value)


class TestNumbers:
    def test_quantity(self):
        assert validate_quantity("3") == 3.0
        with pytest.raises(ValidationError, match="quantity is required."):
            validate_quantity(None)
        with pytest.raises(ValidationError, match="quantity must be a number."):
            validate_quantity("three")

    def test_amount_rounds_to_cents(self):
        assert validate_amount("19.999") == 20.0
        assert validate_amount(3) == 3.0

    def test_amount_must_be_finite(self):
        with pytest.raises(ValidationError, match="amount must be a valid number."):
            validate_amount("inf")
        with pytest.raises(ValidationError, match="amount must be a valid number."):
            validate_amount("abc")

    def test_optional_id(self):
        assert validate_optional_id("", "individual_id") is None
        assert validate_optional_id("5", "individual_id") == 5
        for bad in ("0", "1.5", -3, "x"):
            with pytest.raises(ValidationError, match="individual_id must be a positive integer."):
                validate_optional_id(bad, "individual_id")


class TestStrings:
    def test_optional_string_blank_is_none(self):
        assert validate_optional_string("   ", "description") is None
        assert validate_optional_string(None, "description") is None
        assert validate_optional_string("  beans ", "description") == "beans"

    def test_optional_string_length(self):
        with pytest.raises(ValidationError, match="description must be 500 characters or fewer."):
            validate_optional_string("x" * 501, "description")
        assert validate_optional_string("x" * 1000, "description", 1000) == "x" * 1000
        assert validate_optional_string("x" * 5000, "description", None) == "x" * 5000

    def test_required_string(self):
        with pytest.raises(ValidationError, match="individual_first_name is required."):
            validate_required_string("  ", "individual_first_name", 100)

    def test_choice(self):
        assert validate_choice(" Fulfilled ", "status", ("Open Request", "Fulfilled")) == "Fulfilled"
        with pytest.raises(ValidationError, match="status must be one of: Open Request, Fulfilled"):
            validate_choice("Done", "status", ("Open Request", "Fulfilled"))


class TestCodes:
    def test_code_is_uppercased(self):
        assert validate_code(" acme-1 ", "organization_code") == "ACME-1"

    @pytest.mark.parametrize("value", ["A", "bad code!", "X" * 51])
    def test_code_shape(self, value):
        with pytest.raises(ValidationError, match="organization_code must be 2-50 characters"):
            validate_code(value, "organization_code")

    def test_optional_code(self):
        assert validate_optional_code("", "ministry_code") is None
        assert validate_optional_code("food_pantry", "ministry_code") == "FOOD_PANTRY"


class TestContactFields:
    def test_lenient_email_and_zip(self):
        assert normalize_optional_email(" Foo@Example.COM ") == "foo@example.com"
        assert normalize_optional_email("not-an-email") is None
        assert normalize_optional_zip("62701") == "62701"
        assert normalize_optional_zip("6270") is None

    def test_strict_email_zip_state(self):
        assert validate_optional_email("Ada@Example.com") == "ada@example.com"
        with pytest.raises(ValidationError, match="email must be a valid email address."):
            validate_optional_email("nope")
        with pytest.raises(ValidationError, match="zip must be exactly 5 digits."):
            validate_optional_zip("123")
        assert validate_optional_state("il") == "IL"
        with pytest.raises(ValidationError, match="state must be a 2-letter code."):
            validate_optional_state("Ill")

    def test_normalize_bool(self):
        assert normalize_bool("yes") is True
        assert normalize_bool(" OFF ") is False
        assert normalize_bool(None) is None
        assert normalize_bool(1) is True
