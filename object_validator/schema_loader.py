"""
Schema documents.

Builds a validation schema from a declarative YAML or JSON document, so
schemas can live next to the data they describe instead of in code:

    fields:
      name:
        - rule: required
          message: Name is required
        - rule: min_length
          args: [3]
      address:
        country:
          - rule: element_of
            args: [["US", "FR"]]

A field maps either to a list of rule specs (a leaf) or to a mapping of
fields (a nested schema). Documents are checked against
SCHEMA_DOCUMENT_SCHEMA before any rule is built.
"""

import os
import re
import json
import logging
import urllib.parse
from typing import Any, Dict, List

import yaml
from jsonschema import validate, ValidationError

from .config_loader import fetch_uri
from .rules import builtin
from .rules.base import Rule

logger = logging.getLogger(__name__)

# Rule names usable in documents, mapped to their factories
RULE_FACTORIES = {
    "required": builtin.required,
    "min_number": builtin.min_number,
    "max_number": builtin.max_number,
    "min_length": builtin.min_length,
    "max_length": builtin.max_length,
    "email_address": builtin.email_address,
    "regular_expression": builtin.regular_expression,
    "equal_to": builtin.equal_to,
    "equal": builtin.equal_to,
    "element_of": builtin.element_of,
    "contain_upper_lower_case": builtin.contain_upper_lower_case,
    "contain_number": builtin.contain_number,
    "contain_special_char": builtin.contain_special_char,
    "strong_password": builtin.strong_password,
}


def _single_arg(arg_type: str) -> Dict[str, Any]:
    """Schema of an ``args`` list holding exactly one value of the given JSON type."""
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "array",
        "prefixItems": [{"type": arg_type}],
        "minItems": 1,
        "maxItems": 1,
    }


_NO_ARGS = {"$schema": "https://json-schema.org/draft/2020-12/schema", "type": "array", "maxItems": 0}
_NUMBER_ARGS = _single_arg("number")
_LENGTH_ARGS = _single_arg("integer")
_STRING_ARGS = _single_arg("string")

# JSON Schema of the ``args`` list of each rule
RULE_ARGS_SCHEMAS = {
    "required": _NO_ARGS,
    "min_number": _NUMBER_ARGS,
    "max_number": _NUMBER_ARGS,
    "min_length": _LENGTH_ARGS,
    "max_length": _LENGTH_ARGS,
    "email_address": _NO_ARGS,
    "regular_expression": _STRING_ARGS,
    "equal_to": _STRING_ARGS,
    "equal": _STRING_ARGS,
    "element_of": _single_arg("array"),
    "contain_upper_lower_case": _NO_ARGS,
    "contain_number": _NO_ARGS,
    "contain_special_char": _NO_ARGS,
    "strong_password": _NO_ARGS,
}

SCHEMA_DOCUMENT_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["fields"],
    "properties": {
        "fields": {"$ref": "#/$defs/node"},
    },
    "$defs": {
        "node": {
            "type": "object",
            "additionalProperties": {
                "oneOf": [
                    {"type": "array", "items": {"$ref": "#/$defs/rule"}},
                    {"$ref": "#/$defs/node"},
                ]
            },
        },
        "rule": {
            "type": "object",
            "required": ["rule"],
            "additionalProperties": False,
            "properties": {
                "rule": {"type": "string"},
                "args": {"type": "array"},
                "message": {"type": "string"},
            },
        },
    },
}


def build_schema(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Turn a schema document into a schema of Rule instances.

    Args:
        document: Parsed document with a top-level ``fields`` mapping

    Returns:
        Schema usable with validate_object / validate_field

    Raises:
        ValueError: If the document is malformed, names an unknown rule or
            gives a rule arguments it can't be built from
    """
    try:
        validate(instance=document, schema=SCHEMA_DOCUMENT_SCHEMA)
    except ValidationError as e:
        error_path = " -> ".join(str(p) for p in e.path) if e.path else "root"
        raise ValueError(f"Invalid schema document at {error_path}: {e.message}") from e

    return _build_node(document["fields"], path="")


def _build_node(node: Dict[str, Any], path: str) -> Dict[str, Any]:
    schema = {}
    for field_name, entry in node.items():
        field_path = f"{path}.{field_name}" if path else field_name
        if isinstance(entry, list):
            schema[field_name] = [_build_rule(spec, field_path) for spec in entry]
        else:
            schema[field_name] = _build_node(entry, field_path)
    return schema


def _build_rule(spec: Dict[str, Any], field_path: str) -> Rule:
    rule_name = spec["rule"]
    factory = RULE_FACTORIES.get(rule_name)
    if factory is None:
        raise ValueError(f"Unknown rule '{rule_name}' for field '{field_path}'")

    args: List[Any] = spec.get("args", [])
    try:
        validate(instance=args, schema=RULE_ARGS_SCHEMAS[rule_name])
    except ValidationError as e:
        raise ValueError(
            f"Bad arguments {args} for rule '{rule_name}' on field '{field_path}': {e.message}"
        ) from e

    try:
        return factory(*args, error_message=spec.get("message"))
    except (TypeError, re.error) as e:
        raise ValueError(
            f"Bad arguments {args} for rule '{rule_name}' on field '{field_path}': {e}"
        ) from e


def load_schema(uri: str) -> Dict[str, Any]:
    """
    Load and build a schema document from a path or URI.

    Supports:
    - Relative or absolute paths
    - file:// - Local filesystem
    - https:// and http:// - Remote

    Documents ending in .json are parsed as JSON, anything else as YAML.

    Raises:
        ValueError: If the document is malformed or the URI scheme is unsupported
        RuntimeError: If a remote document cannot be fetched
    """
    parsed = urllib.parse.urlparse(uri)

    if not parsed.scheme:
        with open(os.path.abspath(uri)) as f:
            content = f.read()
    elif parsed.scheme == "file":
        with open(urllib.parse.unquote(parsed.path)) as f:
            content = f.read()
    elif parsed.scheme in ("http", "https"):
        content = fetch_uri(uri)
    else:
        raise ValueError(f"Unsupported URI scheme: {parsed.scheme} in {uri}")

    if parsed.path.endswith(".json"):
        document = json.loads(content)
    else:
        try:
            document = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in schema document {uri}: {e}") from e

    logger.debug(f"Loaded schema document from {uri}")
    return build_schema(document)
