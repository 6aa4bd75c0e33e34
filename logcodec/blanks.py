"""Recursive removal of blank values before serialization."""

from collections.abc import Mapping
from typing import Any


def is_blank(value: Any) -> bool:
    """None, empty strings and empty containers are blank; 0 and False are not."""
    if value is None:
        return True
    if isinstance(value, (str, bytes, Mapping, list, tuple, set, frozenset)):
        return len(value) == 0
    return False


def drop_blanks(value: Any) -> Any:
    """Return a copy of *value* with blank values removed at every depth.

    Containers that become empty after pruning are removed from their parent
    as well. Mappings come back as dicts and sequences as lists.
    """
    if isinstance(value, Mapping):
        pruned = {}
        for key, item in value.items():
            item = drop_blanks(item)
            if not is_blank(item):
                pruned[key] = item
        return pruned
    if isinstance(value, (list, tuple)):
        return [item for item in map(drop_blanks, value) if not is_blank(item)]
    return value
