"""
Dotted-path access into nested mappings.

A path such as ``"address.person.age"`` addresses ``root["address"]["person"]["age"]``.
The same paths are used to look up rule sequences inside a schema, values inside the
object being validated, and the slot an error message is written to.
"""

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


def split_path(path: str) -> List[str]:
    """Split a dotted path into its segments."""
    return path.split(".")


def get_value(root: Any, path: str, log: Optional[logging.Logger] = None) -> Any:
    """
    Return the value addressed by a dotted path.

    Fails soft: a missing segment, or a segment that lands on something that
    is not a mapping, is logged and ``None`` is returned.

    Args:
        root: Mapping to read from
        path: Dotted path (e.g. "address.streetName")
        log: Logger receiving the diagnostic (defaults to this module's logger)

    Returns:
        The addressed value, or None if it doesn't exist
    """
    log = log or logger
    current = root
    for segment in split_path(path):
        if not isinstance(current, Mapping) or segment not in current:
            log.warning(
                f"The field name '{segment}' of path '{path}' doesn't exist in the object"
            )
            return None
        current = current[segment]
    return current


def set_value(root: MutableMapping, path: str, message: str) -> None:
    """
    Append a message to the list stored at a dotted path.

    Missing intermediate nodes are created as empty dicts and the list under
    the final segment is created on first use.

    Args:
        root: Error tree to write into
        path: Dotted path of the field
        message: Message to append
    """
    *parents, leaf = split_path(path)
    node = root
    for segment in parents:
        if segment not in node:
            node[segment] = {}
        node = node[segment]
    node.setdefault(leaf, []).append(message)
