"""Tests for required, number, length, min, max and values."""

import pytest

from formcheck import TestArgumentError


class TestRequired:

    @pytest.mark.parametrize("value", ["", " ", "\n", "  \t "])
    def test_fails_for_empty_and_whitespace(self, evaluate, value):
        assert evaluate("required", value).valid is False

    def test_passes_for_text(self, evaluate):
        assert evaluate("required", "ok").valid is True

    def test_whitespace_allowed_with_flag(self, evaluate):
        assert evaluate("required:true", " ").valid is True
        assert evaluate("required:true", "\n").valid is True

    def test_empty_still_fails_with_whitespace_flag(self, evaluate):
        assert evaluate("required:true", "").valid is False

    def test_none_value_is_empty(self, evaluate):
        assert evaluate("required", None).valid is False


class TestNumber:

    @pytest.mark.parametrize("value", ["12", "-3.5", "+.5", "1e3", "2.", " 42 "])
    def test_accepts_numbers(self, evaluate, value):
        assert evaluate("number", value).valid is True

    @pytest.mark.parametrize("value", ["12abc", "abc", "1.2.3", "nan", "1_000", "--1"])
    def test_rejects_trailing_or_non_numeric_characters(self, evaluate, value):
        assert evaluate("number", value).valid is False

    @pytest.mark.parametrize("value", ["", " ", "\t"])
    def test_blank_is_not_auto_passed(self, evaluate, value):
        assert evaluate("number", value).valid is False

    def test_optional_number_skipped_by_pretest(self, form, make_validator):
        form.add("Age", "")
        validator = make_validator({
            "fields": [{"name": "Age", "tests": "number", "pretest": lambda: form.elements["Age"][0].value != ""}],
        })

        assert validator.check("Age").passed is True

        form.enter("Age", "abc")
        assert validator.check("Age").passed is False


class TestLength:

    @pytest.mark.parametrize("value,expected", [
        ("", True),
        ("   ", True),
        ("abcde", True),
        ("abcd", False),
        ("abcdef", False),
    ])
    def test_exact_length(self, evaluate, value, expected):
        assert evaluate("length:5", value).valid is expected

    def test_min(self, evaluate):
        assert evaluate("min:3", "").valid is True
        assert evaluate("min:3", "ab").valid is False
        assert evaluate("min:3", "abc").valid is True

    def test_max_has_no_blank_shortcut_but_empty_fits(self, evaluate):
        assert evaluate("max:3", "").valid is True
        assert evaluate("max:3", "abc").valid is True
        assert evaluate("max:3", "abcd").valid is False

    def test_missing_argument_raises(self, evaluate):
        with pytest.raises(TestArgumentError):
            evaluate("length", "abc")

    def test_non_integer_argument_raises(self, evaluate):
        with pytest.raises(TestArgumentError):
            evaluate("min:three", "abc")


class TestValues:

    def test_matches_raw_arguments(self, evaluate):
        assert evaluate("values:red:green:all good children go to heaven", "green").valid is True
        assert evaluate(
            "values:red:green:all good children go to heaven",
            "all good children go to heaven"
        ).valid is True

    def test_rejects_other_values(self, evaluate):
        assert evaluate("values:red:green", "blue").valid is False
        assert evaluate("values:red:green", "Red").valid is False

    def test_blank_passes(self, evaluate):
        assert evaluate("values:red:green", "").valid is True
