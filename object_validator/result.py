"""Validation result returned by both engine entry points."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_tree import ErrorTree, JoinedErrors, join_errors


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating an object (or one field of it).

    Attributes:
        is_valid: True when no rule failed
        error_messages: Error tree of message lists, None when valid
        errors: Error tree with each message list joined into one string,
            None when valid
    """

    is_valid: bool
    error_messages: Optional[ErrorTree] = None
    errors: Optional[JoinedErrors] = None

    @classmethod
    def from_tree(cls, tree: Optional[ErrorTree]) -> "ValidationResult":
        """Build a result from an error tree; an empty tree counts as valid."""
        if not tree:
            return cls(is_valid=True)
        return cls(is_valid=False, error_messages=tree, errors=join_errors(tree))

    def to_dict(self) -> Dict[str, Any]:
        """Return the result as a plain dict keyed the way hosts serialise it."""
        return {
            "isValid": self.is_valid,
            "errorMessages": self.error_messages,
            "errors": self.errors,
        }
