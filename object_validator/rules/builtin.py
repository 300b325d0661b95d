"""
Built-in rule factories.

Every factory takes its parameters plus an optional ``error_message`` and
returns an immutable PredicateRule. Without a custom message the rule uses its
default template from the message catalog (see default-messages.yaml). Either
way the message gets a trailing period unless it already ends with
punctuation.

Example:
    schema = {
        "name": [required("Name is required"), min_length(3)],
        "age": [min_number(18)],
    }
"""

import re
import logging
from collections.abc import Mapping, Sized
from decimal import Decimal
from numbers import Number
from typing import Any, Iterable, Optional, Pattern, Union

from ..config_loader import get_config
from .base import PredicateRule, Rule

logger = logging.getLogger(__name__)

TERMINAL_PUNCTUATION = (".", "!", "?", ";")

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)
UPPER_LOWER_CASE_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])")
NUMBER_PATTERN = re.compile(r"^(?=.*\d)")
SPECIAL_CHAR_PATTERN = re.compile(r"^(?=.*[^a-zA-Z\d])([A-Za-z\d]|[^a-zA-Z\d])")
STRONG_PASSWORD_PATTERN = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[^a-zA-Z\d])([A-Za-z\d]|[^a-zA-Z\d]){8,}$"
)


def append_dot(text: Optional[str]) -> Optional[str]:
    """Append a period unless the text already ends with . ! ? or ;"""
    if not text:
        return text
    if text.endswith(TERMINAL_PUNCTUATION):
        return text
    return text + "."


def _message(rule_name: str, error_message: Optional[str], **params) -> str:
    """Pick the custom message or format the rule's default template."""
    if error_message:
        return append_dot(error_message)
    template = get_config().get_message_template(rule_name)
    return append_dot(template.format(**params))


def _to_number(value: Any) -> Optional[Union[int, float, Decimal]]:
    """Return the value as a number, or None if it isn't one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return value
    if isinstance(value, Number):
        return None
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _is_bound(bound: Any, integral: bool = False) -> bool:
    """Check that a rule's configured bound is a real number (an int for lengths)."""
    if isinstance(bound, bool):
        return False
    if integral:
        return isinstance(bound, int)
    return isinstance(bound, (int, float, Decimal))


def required(error_message: Optional[str] = None) -> Rule:
    """Fails for None, False and empty strings or collections."""

    def is_present(value, obj=None):
        if value is None or value is False:
            return False
        if isinstance(value, Sized) and len(value) == 0:
            return False
        return True

    return PredicateRule(is_present, _message("required", error_message), "required")


def min_number(min: Union[int, float], error_message: Optional[str] = None) -> Rule:
    """Fails unless the value is a number (or numeric string) >= min."""

    def at_least(value, obj=None):
        if not _is_bound(min):
            logger.warning(f"min_number: min should be a number (got {min!r})")
            return False
        number = _to_number(value)
        return number is not None and number >= min

    return PredicateRule(at_least, _message("min_number", error_message, min=min), "min_number")


def max_number(max: Union[int, float], error_message: Optional[str] = None) -> Rule:
    """Fails unless the value is a number (or numeric string) <= max."""

    def at_most(value, obj=None):
        if not _is_bound(max):
            logger.warning(f"max_number: max should be a number (got {max!r})")
            return False
        number = _to_number(value)
        return number is not None and number <= max

    return PredicateRule(at_most, _message("max_number", error_message, max=max), "max_number")


def min_length(min: int, error_message: Optional[str] = None) -> Rule:
    """Fails for empty values and values shorter than min."""

    def long_enough(value, obj=None):
        if not value or not isinstance(value, Sized):
            return False
        if not _is_bound(min, integral=True) or min < 1:
            logger.warning(f"min_length: min length should be an int > 0 (got {min!r})")
            return False
        return len(value) >= min

    return PredicateRule(long_enough, _message("min_length", error_message, min=min), "min_length")


def max_length(max: int, error_message: Optional[str] = None) -> Rule:
    """Fails for empty values and values longer than max."""

    def short_enough(value, obj=None):
        if not value or not isinstance(value, Sized):
            return False
        if not _is_bound(max, integral=True) or max < 0:
            logger.warning(f"max_length: max length should be an int >= 0 (got {max!r})")
            return False
        return len(value) <= max

    return PredicateRule(short_enough, _message("max_length", error_message, max=max), "max_length")


def email_address(error_message: Optional[str] = None) -> Rule:
    """Fails unless the value is a well-formed email address."""

    def is_email(value, obj=None):
        if not value or not isinstance(value, str):
            return False
        return EMAIL_PATTERN.fullmatch(value) is not None

    return PredicateRule(is_email, _message("email_address", error_message), "email_address")


def regular_expression(
    pattern: Union[str, Pattern], error_message: Optional[str] = None
) -> Rule:
    """
    Fails unless the pattern matches somewhere in the stringified value.

    Args:
        pattern: Regular expression, as a string or compiled pattern
        error_message: Custom message; the default quotes the value via ':value'
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    def matches(value, obj=None):
        text = "" if value is None else str(value)
        return regex.search(text) is not None

    return PredicateRule(
        matches, _message("regular_expression", error_message), "regular_expression"
    )


def equal_to(field_name: str, error_message: Optional[str] = None) -> Rule:
    """
    Fails unless the value equals a sibling field of the containing object.

    Args:
        field_name: Name of the field to compare with, looked up in the mapping
            that contains the validated field
    """

    def equals_sibling(value, obj=None):
        if not isinstance(obj, Mapping) or field_name not in obj:
            return False
        return value == obj[field_name]

    return PredicateRule(
        equals_sibling, _message("equal_to", error_message, field=field_name), "equal_to"
    )


equal = equal_to


def element_of(items: Optional[Iterable[Any]], error_message: Optional[str] = None) -> Rule:
    """Fails unless the value is one of the given items."""
    if items is None:
        logger.warning("element_of: the list of allowed items is None")
        choices = None
        listed = ""
    else:
        choices = tuple(items)
        listed = ", ".join(str(item) for item in choices)

    def is_element(value, obj=None):
        if choices is None:
            return False
        return value in choices

    return PredicateRule(
        is_element, _message("element_of", error_message, items=listed), "element_of"
    )


def contain_upper_lower_case(error_message: Optional[str] = None) -> Rule:
    """Fails unless the value has both a lower case and an upper case letter."""
    return regular_expression(UPPER_LOWER_CASE_PATTERN, error_message)


def contain_number(error_message: Optional[str] = None) -> Rule:
    """Fails unless the value contains a digit."""
    return regular_expression(NUMBER_PATTERN, error_message)


def contain_special_char(error_message: Optional[str] = None) -> Rule:
    """Fails unless the value contains a character that isn't a letter or digit."""
    return regular_expression(SPECIAL_CHAR_PATTERN, error_message)


def strong_password(error_message: Optional[str] = None) -> Rule:
    """Fails unless the value has 8+ characters mixing case, digits and a special character."""
    return regular_expression(STRONG_PASSWORD_PATTERN, error_message)
