"""
Abstract base class for validation rules.

A rule is a predicate over a field value and the mapping that contains the
field, paired with the message reported when the predicate fails. The engine
only ever calls validate() and reads message, so custom rules can either
subclass Rule or wrap a plain function in PredicateRule.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

VALUE_PLACEHOLDER = ":value"


class Rule(ABC):
    """
    Abstract base class for all validation rules.

    Rules must not hold mutable state: the same rule instance may be shared by
    many schemas and validated concurrently.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def message(self) -> str:
        """Return the failure message template (may contain ':value')."""

    @abstractmethod
    def validate(self, value: Any, obj: Any = None) -> bool:
        """
        Check a field value.

        Args:
            value: The field's value
            obj: The mapping that directly contains the field, for cross-field rules

        Returns:
            True if the value satisfies the rule
        """

    def format_message(self, value: Any) -> str:
        """Return the message with the ':value' placeholder replaced by the value."""
        template = self.message
        if template and VALUE_PLACEHOLDER in template:
            return template.replace(VALUE_PLACEHOLDER, str(value), 1)
        return template


class PredicateRule(Rule):
    """Rule built from a predicate function and a message."""

    __slots__ = ("_predicate", "_message", "_name")

    def __init__(
        self,
        predicate: Callable[[Any, Any], bool],
        message: str,
        name: Optional[str] = None,
    ):
        """
        Args:
            predicate: Function of (value, obj) returning True when the value is valid
            message: Failure message template
            name: Optional rule name used in repr and diagnostics
        """
        object.__setattr__(self, "_predicate", predicate)
        object.__setattr__(self, "_message", message)
        object.__setattr__(self, "_name", name or getattr(predicate, "__name__", "rule"))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def name(self) -> str:
        return self._name

    @property
    def message(self) -> str:
        return self._message

    def validate(self, value: Any, obj: Any = None) -> bool:
        return bool(self._predicate(value, obj))

    def __repr__(self) -> str:
        return f"PredicateRule(name='{self._name}', message='{self._message}')"
