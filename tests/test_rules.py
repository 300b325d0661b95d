"""
Tests for the built-in rule factories

Covers predicates, default messages and the trailing-period rule.
"""
import logging
import re
from decimal import Decimal

import pytest

from object_validator.config_loader import reset_config
from object_validator.rules import (
    PredicateRule,
    Rule,
    append_dot,
    contain_number,
    contain_special_char,
    contain_upper_lower_case,
    element_of,
    email_address,
    equal,
    equal_to,
    max_length,
    max_number,
    min_length,
    min_number,
    regular_expression,
    required,
    strong_password,
)


@pytest.fixture(autouse=True)
def default_messages():
    reset_config()
    yield
    reset_config()


class TestAppendDot:
    """Test append_dot()."""

    @pytest.mark.parametrize("text,expected", [
        ("Name is required", "Name is required."),
        ("Name is required.", "Name is required."),
        ("Name is required!", "Name is required!"),
        ("Is the name required?", "Is the name required?"),
        ("Name is required;", "Name is required;"),
    ])
    def test_append_dot(self, text, expected):
        assert append_dot(text) == expected

    def test_empty_text(self):
        assert append_dot("") == ""
        assert append_dot(None) is None


class TestDefaultMessages:
    """Test the default message of every factory."""

    @pytest.mark.parametrize("rule,expected", [
        (lambda: required(), "This field is required."),
        (lambda: min_number(18), "The minimum value for this field is 18."),
        (lambda: max_number(55), "The maximum value for this field is 55."),
        (lambda: min_length(3), "The minimum length for this field is 3."),
        (lambda: max_length(5), "The maximum length for this field is 5."),
        (lambda: email_address(),
         "Invalid email address. The valid email example: john.doe@example.com."),
        (lambda: regular_expression(r"\d"),
         "The value ':value' doesn't match the regular expression specification."),
        (lambda: equal_to("password"), "The value should be equal to password value."),
        (lambda: element_of(["US", "FR"]), "The value ':value' is not the element of [US, FR]."),
    ])
    def test_default_message(self, rule, expected):
        assert rule().message == expected

    def test_custom_message_gets_period(self):
        assert required("Name is required").message == "Name is required."

    def test_custom_message_keeps_punctuation(self):
        assert min_length(3, "Too short!").message == "Too short!"

    def test_format_message_substitutes_value(self):
        rule = element_of(["US", "FR"])
        assert rule.format_message("UK") == "The value 'UK' is not the element of [US, FR]."

    def test_format_message_without_placeholder(self):
        assert required().format_message("") == "This field is required."


class TestRequired:
    """Test required()."""

    @pytest.mark.parametrize("value", [None, "", [], {}, False])
    def test_missing_values(self, value):
        assert not required().validate(value)

    @pytest.mark.parametrize("value", ["irpan", 0, ["item"], True, 0.0])
    def test_present_values(self, value):
        assert required().validate(value)


class TestNumbers:
    """Test min_number() and max_number()."""

    def test_min_number(self):
        rule = min_number(18)
        assert rule.validate(18)
        assert rule.validate(18.5)
        assert not rule.validate(17)

    def test_max_number(self):
        rule = max_number(55)
        assert rule.validate(55)
        assert not rule.validate(56)

    def test_numeric_strings(self):
        assert min_number(18).validate("20")
        assert not min_number(18).validate("17")

    def test_decimal(self):
        assert max_number(10).validate(Decimal("9.99"))

    @pytest.mark.parametrize("value", ["", "abc", None, True, [18]])
    def test_non_numbers_fail(self, value):
        assert not min_number(0).validate(value)
        assert not max_number(100).validate(value)

    @pytest.mark.parametrize("bound", ["18", None, True])
    def test_non_numeric_bound_warns_and_fails(self, bound, caplog):
        with caplog.at_level(logging.WARNING):
            assert not min_number(bound).validate(20)
            assert not max_number(bound).validate(20)
        assert "min should be a number" in caplog.text
        assert "max should be a number" in caplog.text


class TestLengths:
    """Test min_length() and max_length()."""

    def test_min_length(self):
        rule = min_length(3)
        assert rule.validate("irp")
        assert rule.validate(["a", "b", "c"])
        assert not rule.validate("ir")

    def test_max_length(self):
        rule = max_length(5)
        assert rule.validate("irpan")
        assert not rule.validate("irpans")

    @pytest.mark.parametrize("value", ["", None, 12345])
    def test_empty_or_unsized_values_fail(self, value):
        assert not min_length(1).validate(value)
        assert not max_length(10).validate(value)

    def test_degenerate_min_length_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert not min_length(0).validate("irpan")
        assert "min length" in caplog.text

    def test_degenerate_max_length_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert not max_length(-1).validate("irpan")
        assert "max length" in caplog.text

    @pytest.mark.parametrize("bound", ["3", 2.5, None])
    def test_non_integer_bounds_warn(self, bound, caplog):
        with caplog.at_level(logging.WARNING):
            assert not min_length(bound).validate("irpan")
            assert not max_length(bound).validate("irpan")
        assert "min length" in caplog.text
        assert "max length" in caplog.text


class TestEmailAddress:
    """Test email_address()."""

    @pytest.mark.parametrize("value", ["john.doe@example.com", "irpan@mail.co.id"])
    def test_valid(self, value):
        assert email_address().validate(value)

    @pytest.mark.parametrize("value", [
        "irpan2gmail.com", "irpan@", "", None, 42, "john.doe@example.com\n",
    ])
    def test_invalid(self, value):
        assert not email_address().validate(value)


class TestRegularExpression:
    """Test regular_expression() and the password helpers."""

    def test_string_pattern(self):
        assert regular_expression(r"^\d+$").validate("123")
        assert not regular_expression(r"^\d+$").validate("12a")

    def test_compiled_pattern(self):
        assert regular_expression(re.compile("^ab", re.IGNORECASE)).validate("ABC")

    def test_value_is_stringified(self):
        assert regular_expression(r"^\d+$").validate(123)

    def test_strong_password(self):
        assert strong_password().validate("cumaMisCall1!")
        assert not strong_password().validate("cumaMisCall1")
        assert not strong_password().validate("cM1!")

    def test_contain_upper_lower_case(self):
        assert contain_upper_lower_case().validate("aB")
        assert not contain_upper_lower_case().validate("ab")

    def test_contain_number(self):
        assert contain_number().validate("abc1")
        assert not contain_number().validate("abc")

    def test_contain_special_char(self):
        assert contain_special_char().validate("abc!")
        assert not contain_special_char().validate("abc1")


class TestEqualTo:
    """Test equal_to() and its equal alias."""

    def test_compares_with_sibling(self):
        rule = equal_to("password")
        assert rule.validate("secret", {"password": "secret"})
        assert not rule.validate("secret", {"password": "other"})

    def test_missing_sibling_fails(self):
        assert not equal_to("password").validate("secret", {})
        assert not equal_to("password").validate("secret", None)

    def test_alias(self):
        assert equal is equal_to


class TestElementOf:
    """Test element_of()."""

    def test_membership(self):
        rule = element_of(["US", "FR"])
        assert rule.validate("US")
        assert not rule.validate("UK")

    def test_accepts_any_iterable(self):
        assert element_of(c for c in "abc").validate("b")

    def test_none_items_warn_and_fail(self, caplog):
        with caplog.at_level(logging.WARNING):
            rule = element_of(None)
        assert not rule.validate("US")
        assert "None" in caplog.text


class TestPredicateRule:
    """Test the Rule contract."""

    def test_is_rule(self):
        assert isinstance(required(), Rule)

    def test_immutable(self):
        rule = required()
        with pytest.raises(AttributeError):
            rule.message = "changed"
        with pytest.raises(AttributeError):
            rule._message = "changed"

    def test_no_instance_dict(self):
        assert not hasattr(required(), "__dict__")

    def test_custom_predicate(self):
        rule = PredicateRule(lambda value, obj: value == obj["expected"], "Mismatch", "matches")
        assert rule.validate(1, {"expected": 1})
        assert rule.name == "matches"
        assert "matches" in repr(rule)

    def test_subclass(self):
        class Even(Rule):
            message = "Must be even"

            def validate(self, value, obj=None):
                return value % 2 == 0

        assert Even().validate(4)
        assert Even().format_message(3) == "Must be even"
