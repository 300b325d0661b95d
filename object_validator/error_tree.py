"""Error tree model and the transform that joins message lists per field."""

from collections.abc import Mapping
from typing import Dict, List, Optional, Union

# field name -> list of messages, or a nested tree for nested schemas
ErrorTree = Dict[str, Union[List[str], "ErrorTree"]]

# same shape with every message list collapsed to one string
JoinedErrors = Dict[str, Union[str, "JoinedErrors"]]


def join_errors(tree: Optional[ErrorTree]) -> Optional[JoinedErrors]:
    """
    Collapse every message list of an error tree into a single string.

    Messages are joined with a single space in their original order. Nested
    trees are joined recursively.

    Returns:
        The joined tree, or None if the tree is None or empty
    """
    if not tree:
        return None

    joined = {}
    for field_name, node in tree.items():
        if isinstance(node, list):
            joined[field_name] = " ".join(node)
        elif isinstance(node, Mapping):
            nested = join_errors(node)
            if nested is not None:
                joined[field_name] = nested
    return joined or None
