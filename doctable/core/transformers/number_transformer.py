"""
NumberTransformer - numeric coercion that yields NaN instead of failing.
"""

import math
import re
from decimal import Decimal
from typing import Any

from doctable.core.models import TransformRule

from .base_transformer import BaseTransformer

# ASCII only: digit separators ("1_000") and non-ASCII digits are not numbers
INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")
DECIMAL_TEXT = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


class NumberTransformer(BaseTransformer):
    """
    Coerces values to numbers.

    Integral text becomes int ("30" -> 30), other numeric text becomes float
    ("29.99" -> 29.99). Booleans become 0/1. Anything non-numeric, including
    None and empty text, becomes NaN.
    """

    def transform(self, value: Any, rule: TransformRule | None = None) -> int | float:
        if value is None:
            return math.nan
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int, float)):
            return value
        if isinstance(value, Decimal):
            return float(value)
        if isinstance(value, str):
            return self._parse_text(value)
        return math.nan

    @staticmethod
    def _parse_text(text: str) -> int | float:
        text = text.strip()
        if INTEGER_TEXT.fullmatch(text):
            return int(text)
        if DECIMAL_TEXT.fullmatch(text):
            return float(text)
        return math.nan

    @property
    def kind(self) -> str:
        return "number"
