"""
object-validator: declarative validation of plain (nested) objects

This library provides:
- Per-field rule lists with custom or default messages
- Nested schemas for nested objects
- Single-field validation by dotted path (e.g. "address.person.age")
- Error trees of message lists plus a joined, one-string-per-field view
- Schema documents in YAML or JSON

Example:
    from object_validator import validate_object, required, min_number

    schema = {
        "name": [required("Name is required")],
        "age": [required(), min_number(18)],
    }
    result = validate_object({"name": "", "age": 20}, schema)
    result.errors  # {"name": "Name is required."}
"""

from .error_tree import join_errors
from .path_access import get_value, set_value
from .result import ValidationResult
from .rules import (
    Rule,
    PredicateRule,
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
from .schema_loader import build_schema, load_schema
from .validator import ObjectValidator, validate_field, validate_object

__version__ = "0.1.0"
__all__ = [
    "ObjectValidator",
    "ValidationResult",
    "validate_object",
    "validate_field",
    "build_schema",
    "load_schema",
    "get_value",
    "set_value",
    "join_errors",
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
