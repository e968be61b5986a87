"""
Array expansion: one derived document per element of a designated array.
"""

from collections.abc import Mapping
from typing import Any

from doctable.core.accessors import get_nested_value, is_missing
from doctable.core.errors import MappingError

EXPANDED_MARKER = "[]"


def normalize_array_path(array_field: str) -> str:
    """Strip an optional trailing "[]" marker."""
    if array_field.endswith(EXPANDED_MARKER):
        return array_field[: -len(EXPANDED_MARKER)]
    return array_field


class ArrayExpander:
    """
    Produces one derived document per element of ``array_field``.

    Each derived document equals the original except that the array is
    replaced: a mapping element has its keys hoisted to
    ``"{array_field}[].{key}"``, a scalar element is stored under
    ``"{array_field}[]"``. For a nested path such as ``order.items`` the
    array is removed from its parent and the hoisted keys sit at the top
    level of the derived document.
    """

    def __init__(self, array_field: str, preserve_empty_arrays: bool = False):
        """
        Initialize expander.

        Args:
            array_field: Dotted path of the array, optional trailing "[]"
            preserve_empty_arrays: Yield one document with a None element
                                   for an empty array instead of none
        """
        self.array_field = array_field
        self.array_path = normalize_array_path(array_field)
        self.preserve_empty_arrays = preserve_empty_arrays

    def expand(self, document: Mapping[str, Any], document_id: str | None = None) -> list[dict[str, Any]]:
        """
        Expand a document.

        Args:
            document: Source document (never mutated)
            document_id: Identifier used for error attribution

        Returns:
            Derived documents, in array order

        Raises:
            MappingError: VALIDATION kind when the path does not hold an array
        """
        elements = get_nested_value(document, self.array_path)

        if is_missing(elements) or not isinstance(elements, (list, tuple)):
            raise MappingError.validation(
                f"Document does not contain array field: {self.array_field}",
                field=self.array_field,
                document_id=document_id,
            )

        if not elements:
            if self.preserve_empty_arrays:
                return [self._derive(document, None)]
            return []

        return [self._derive(document, element) for element in elements]

    def _derive(self, document: Mapping[str, Any], element: Any) -> dict[str, Any]:
        if isinstance(element, Mapping):
            hoisted = {
                f"{self.array_path}{EXPANDED_MARKER}.{key}": value
                for key, value in element.items()
            }
        else:
            hoisted = {f"{self.array_path}{EXPANDED_MARKER}": element}

        segments = self.array_path.split(".")
        head = segments[0]
        derived: dict[str, Any] = {}

        for key, value in document.items():
            if key != head:
                derived[key] = value
                continue
            if len(segments) > 1:
                derived[key] = _without_path(value, segments[1:])
            derived.update(hoisted)

        return derived


def _without_path(node: Mapping[str, Any], segments: list[str]) -> dict[str, Any]:
    """Copy ``node`` along ``segments`` with the final key removed."""
    copy = dict(node)
    head, rest = segments[0], segments[1:]
    if rest:
        copy[head] = _without_path(node[head], rest)
    else:
        copy.pop(head, None)
    return copy
