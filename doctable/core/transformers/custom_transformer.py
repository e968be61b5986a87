"""
CustomTransformer - delegates to a caller-supplied function.
"""

from typing import Any

from doctable.core.models import TransformRule

from .base_transformer import BaseTransformer, TransformError


class CustomTransformer(BaseTransformer):
    """
    Calls ``rule.custom_transform(value)`` and returns its result untouched.

    The function signature should be:
        def my_transform(value: Any) -> Any: ...
    """

    def transform(self, value: Any, rule: TransformRule | None = None) -> Any:
        func = rule.custom_transform if rule is not None else None
        if func is None:
            raise TransformError(self.kind, "custom transform requires a custom_transform callable")
        if not callable(func):
            raise TransformError(self.kind, "custom_transform must be callable")

        try:
            return func(value)
        except Exception as e:
            raise TransformError(self.kind, f"custom transform raised {type(e).__name__}: {e}") from e

    @property
    def kind(self) -> str:
        return "custom"
