"""
StringTransformer - converts values to text.
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from doctable.core.models import TransformRule
from doctable.utils.serialization import to_json_text

from .base_transformer import BaseTransformer


class StringTransformer(BaseTransformer):
    """
    Stringifies values.

    Mappings and sequences become compact JSON, booleans become
    "true"/"false", dates become ISO text and None becomes "".
    """

    def transform(self, value: Any, rule: TransformRule | None = None) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (Mapping, list, tuple)):
            return to_json_text(value)
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        return str(value)

    @property
    def kind(self) -> str:
        return "string"
