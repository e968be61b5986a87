"""
BooleanTransformer - truthiness with text parsing.
"""

import math
from typing import Any

from doctable.core.models import TransformRule

from .base_transformer import BaseTransformer


class BooleanTransformer(BaseTransformer):
    """
    Coerces values to booleans.

    Text must equal "true", "1" or "yes" ignoring case to be True; every other
    string, including padded text such as " yes ", is False. Non-text values
    use truthiness; NaN is False.
    """

    TRUE_STRINGS = frozenset({"true", "1", "yes"})

    def transform(self, value: Any, rule: TransformRule | None = None) -> bool:
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in self.TRUE_STRINGS
        if isinstance(value, float) and math.isnan(value):
            return False
        return bool(value)

    @property
    def kind(self) -> str:
        return "boolean"
