"""
DateTransformer - parses dates and serializes them in a chosen format.
"""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Any

from doctable.core.models import TransformRule

from .base_transformer import BaseTransformer

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class DateTransformer(BaseTransformer):
    """
    Parses a value as a point in time and serializes it.

    Accepted input:
    - datetime / date objects (naive values are taken as UTC)
    - ISO-8601 text ("2024-01-15", "2024-01-15T10:30:00Z", ...)
    - numbers, as milliseconds since the Unix epoch

    Output formats (rule format, else the run default, else "ISO"):
    - ISO: "2024-01-15T10:30:00.000Z"
    - unix: integer seconds since the epoch
    - date: "2024-01-15"
    - datetime: "2024-01-15 10:30:00"

    Unparsable input yields None.
    """

    def transform(self, value: Any, rule: TransformRule | None = None) -> str | int | None:
        if value is None:
            return None

        parsed = self.parse(value)
        if parsed is None:
            return None

        date_format = self._format(rule, "date_format", "ISO").lower()
        if date_format == "unix":
            return math.floor(parsed.timestamp())
        if date_format == "date":
            return parsed.date().isoformat()
        if date_format == "datetime":
            return f"{parsed.date().isoformat()} {parsed.strftime('%H:%M:%S')}"
        # Unrecognised formats fall back to ISO
        return f"{parsed.date().isoformat()}T{parsed.strftime('%H:%M:%S')}.{parsed.microsecond // 1000:03d}Z"

    @staticmethod
    def parse(value: Any) -> datetime | None:
        """Parse a value into an aware UTC datetime, or None."""
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        elif isinstance(value, bool):
            return None
        elif isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                return None
            try:
                return EPOCH + timedelta(milliseconds=value)
            except OverflowError:
                return None
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError:
                return None
        else:
            return None

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)

    @property
    def kind(self) -> str:
        return "date"
