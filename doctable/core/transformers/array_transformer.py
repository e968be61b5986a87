"""
ArrayTransformer - reconstitutes list values.
"""

from typing import Any

from doctable.core.models import TransformRule

from .base_transformer import BaseTransformer


class ArrayTransformer(BaseTransformer):
    """
    Lists pass through, text is split on the separator (rule format, else
    the run default, else ",") with each piece trimmed, and any other value
    becomes a one-element list.
    """

    def transform(self, value: Any, rule: TransformRule | None = None) -> list[Any]:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return list(value)
        if isinstance(value, str):
            separator = self._format(rule, "array_separator", ",")
            return [item.strip() for item in value.split(separator)]
        return [value]

    @property
    def kind(self) -> str:
        return "array"
