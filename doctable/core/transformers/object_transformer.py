"""
ObjectTransformer - wraps non-mapping values.
"""

from collections.abc import Mapping
from typing import Any

from doctable.core.models import TransformRule

from .base_transformer import BaseTransformer


class ObjectTransformer(BaseTransformer):
    """Mappings pass through; anything else becomes {"value": <original>}."""

    def transform(self, value: Any, rule: TransformRule | None = None) -> dict[str, Any]:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return dict(value)
        return {"value": value}

    @property
    def kind(self) -> str:
        return "object"
