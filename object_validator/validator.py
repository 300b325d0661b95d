"""
Validation engine.

Walks a schema against a plain object and collects the messages of every
failed rule into an error tree shaped like the schema. Validation failures
only ever end up in the returned ValidationResult; usage faults (a schema
field missing from the object, an empty path, a malformed schema node) are
logged as warnings and the offending field is skipped.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence

from .error_tree import ErrorTree
from .path_access import get_value, set_value, split_path
from .result import ValidationResult
from .rules.base import Rule

Schema = Dict[str, Any]


def is_leaf(node: Any) -> bool:
    """A schema node is a leaf when it is a sequence of rules."""
    return isinstance(node, (list, tuple))


def is_nested(node: Any) -> bool:
    return isinstance(node, Mapping)


class ObjectValidator:
    """Applies a schema of rules to plain objects"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Args:
            logger: Logger receiving usage-fault diagnostics (defaults to this
                module's logger)
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_object(self, obj: Any, schema: Schema) -> ValidationResult:
        """
        Validate every field named by the schema.

        Fields are visited in schema declaration order. A field the object
        doesn't have is logged and skipped, even when it carries a required
        rule.

        Args:
            obj: Mapping to validate
            schema: Mapping of field name to a list of rules or a nested schema

        Returns:
            ValidationResult; is_valid is True when no rule failed
        """
        tree = self._validate_node(obj, schema, path="")
        result = ValidationResult.from_tree(tree)
        self.logger.debug(
            f"Validated {len(schema)} schema fields, valid={result.is_valid}"
        )
        return result

    def _validate_node(self, obj: Any, schema: Schema, path: str) -> Optional[ErrorTree]:
        """Validate one nesting level and return its error tree (None when clean)."""
        tree: ErrorTree = {}

        for field_name, node in schema.items():
            field_path = f"{path}.{field_name}" if path else field_name

            if not isinstance(obj, Mapping) or field_name not in obj:
                self.logger.warning(
                    f"The field '{field_path}' is in the schema but not in the object"
                )
                continue

            value = obj[field_name]

            if is_nested(node):
                nested = self._validate_node(value, node, field_path)
                if nested:
                    tree[field_name] = nested
            elif is_leaf(node):
                messages = self._apply_rules(node, value, obj, field_path)
                if messages:
                    tree[field_name] = messages
            else:
                self.logger.warning(
                    f"The schema entry for '{field_path}' must be a list of rules or "
                    f"a nested schema, got {type(node).__name__}"
                )

        return tree or None

    def _apply_rules(
        self, rules: Sequence[Any], value: Any, obj: Any, field_path: str
    ) -> List[str]:
        """Run rules in order and return the messages of those that failed."""
        messages = []
        for rule in rules:
            if not isinstance(rule, Rule):
                self.logger.warning(
                    f"Skipping {type(rule).__name__} in the rules of '{field_path}': "
                    f"not a Rule"
                )
                continue
            if not rule.validate(value, obj):
                messages.append(rule.format_message(value))
        return messages

    def validate_field(
        self, obj: Any, path: str, schema: Schema
    ) -> Optional[ValidationResult]:
        """
        Validate the single field addressed by a dotted path.

        Only the rules at ``path`` run; sibling fields and nested schemas are
        ignored. Failures are written into a fresh error tree under the full
        path, e.g. ``{"address": {"person": {"age": [...]}}}``.

        Args:
            obj: Mapping to validate
            path: Dotted path of the field (e.g. "address.person.age")
            schema: The schema of the whole object

        Returns:
            ValidationResult, or None if the path is empty
        """
        if not path:
            self.logger.warning("validate_field needs a non-empty field path")
            return None

        rules = get_value(schema, path, self.logger)
        if not is_leaf(rules):
            self.logger.warning(f"The schema has no list of rules at '{path}'")
            return ValidationResult.from_tree(None)

        value = get_value(obj, path, self.logger)
        parents = split_path(path)[:-1]
        container = get_value(obj, ".".join(parents), self.logger) if parents else obj

        tree: ErrorTree = {}
        for message in self._apply_rules(rules, value, container, path):
            set_value(tree, path, message)

        result = ValidationResult.from_tree(tree)
        self.logger.debug(f"Validated field '{path}', valid={result.is_valid}")
        return result


_default_validator = ObjectValidator()


def validate_object(obj: Any, schema: Schema) -> ValidationResult:
    """Validate an object against a schema with the default validator."""
    return _default_validator.validate_object(obj, schema)


def validate_field(obj: Any, path: str, schema: Schema) -> Optional[ValidationResult]:
    """Validate one dotted-path field with the default validator."""
    return _default_validator.validate_field(obj, path, schema)
