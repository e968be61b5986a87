"""
Flattening of nested documents into dotted-path mappings.

Nested mappings become "parent.child" keys, arrays of mappings become
"field[i].child" keys, and arrays of scalars are kept as array values.
"""

import re
from collections.abc import Mapping
from typing import Any

from doctable.observability.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 10

# Binary payloads exported from document stores appear as "x.buffer" or "x.buffer.<n>"
BUFFER_FIELD_PATTERN = re.compile(r"\.buffer(\.\d+)?$")


def flatten_document(
    document: Mapping[str, Any],
    prefix: str = "",
    max_depth: int = DEFAULT_MAX_DEPTH,
    current_depth: int = 0,
) -> dict[str, Any]:
    """
    Flatten a nested document.

    Once ``current_depth`` exceeds ``max_depth`` the remaining subtree is
    stored verbatim under ``prefix`` without further traversal. Empty arrays
    are kept as empty arrays. An array is expanded into indexed paths only
    when every element is a mapping.

    Args:
        document: Mapping to flatten (never mutated)
        prefix: Dotted path accumulated so far
        max_depth: Depth limit
        current_depth: Depth of ``document`` below the root

    Returns:
        Flat mapping of dotted path to scalar, array or None
    """
    if current_depth > max_depth:
        logger.debug(f"Depth limit {max_depth} reached at '{prefix}', storing subtree verbatim")
        return {prefix: document}

    result: dict[str, Any] = {}

    for key, value in document.items():
        path = f"{prefix}.{key}" if prefix else str(key)

        if value is None:
            result[path] = None
        elif isinstance(value, Mapping):
            result.update(flatten_document(value, path, max_depth, current_depth + 1))
        elif isinstance(value, (list, tuple)):
            if value and all(isinstance(item, Mapping) for item in value):
                for index, item in enumerate(value):
                    result.update(flatten_document(item, f"{path}[{index}]", max_depth, current_depth + 1))
            else:
                result[path] = list(value)
        else:
            result[path] = value

    return result


def is_buffer_field(path: str, preserve_buffer_fields: bool = False) -> bool:
    """
    True when ``path`` denotes binary-buffer data that should be dropped.

    >>> is_buffer_field("avatar.buffer")
    True
    >>> is_buffer_field("avatar.buffer.12")
    True
    >>> is_buffer_field("avatar.buffer", preserve_buffer_fields=True)
    False
    """
    if preserve_buffer_fields:
        return False
    return BUFFER_FIELD_PATTERN.search(path) is not None


class DocumentFlattener:
    """
    Flattens documents and applies the post-processing filters.

    Filters: exact-name exclusion and, unless preserved, removal of
    binary-buffer-shaped paths.
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        exclude_fields: list[str] | None = None,
        preserve_buffer_fields: bool = False,
    ):
        """
        Initialize flattener.

        Args:
            max_depth: Depth limit for recursion
            exclude_fields: Flattened keys dropped by exact name
            preserve_buffer_fields: Keep ".buffer" / ".buffer.<n>" paths
        """
        self.max_depth = max_depth
        self.exclude_fields = set(exclude_fields or [])
        self.preserve_buffer_fields = preserve_buffer_fields

    def flatten(self, document: Mapping[str, Any]) -> dict[str, Any]:
        flattened = flatten_document(document, max_depth=self.max_depth)
        return {
            key: value
            for key, value in flattened.items()
            if key not in self.exclude_fields
            and not is_buffer_field(key, self.preserve_buffer_fields)
        }
