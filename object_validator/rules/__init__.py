"""Validation rules: the Rule contract and the built-in rule factories."""

from .base import Rule, PredicateRule
from .builtin import (
    append_dot,
    required,
    min_number,
    max_number,
    min_length,
    max_length,
    email_address,
    regular_expression,
    equal_to,
    equal,
    element_of,
    contain_upper_lower_case,
    contain_number,
    contain_special_char,
    strong_password,
)

__all__ = [
    "Rule",
    "PredicateRule",
    "append_dot",
    "required",
    "min_number",
    "max_number",
    "min_length",
    "max_length",
    "email_address",
    "regular_expression",
    "equal_to",
    "equal",
    "element_of",
    "contain_upper_lower_case",
    "contain_number",
    "contain_special_char",
    "strong_password",
]
