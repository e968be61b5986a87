"""
Dotted-path access into nested documents.
"""

from collections.abc import Mapping
from typing import Any


class _Missing:
    """Sentinel type for a path that does not resolve."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def get_nested_value(document: Any, path: str) -> Any:
    """
    Follow a dotted path through nested mappings.

    Each segment is a plain key lookup. Returns ``MISSING`` when the path is
    empty or any intermediate value is absent, None, or not a mapping; never
    raises for a missing node. A terminal None is returned as None.

    >>> get_nested_value({"user": {"name": "Ann"}}, "user.name")
    'Ann'
    >>> get_nested_value({"user": None}, "user.name")
    MISSING
    """
    if not path or not isinstance(document, Mapping):
        return MISSING

    current: Any = document
    for key in path.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return MISSING
        current = current[key]
    return current


def is_missing(value: Any) -> bool:
    return value is MISSING
