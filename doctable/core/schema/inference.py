"""
Column schema inference over produced rows.

Derives each column's type tag and required flag from the values observed
across every row, then orders columns deterministically.
"""

import math
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from doctable.core.models import TableColumn


class ColumnInferrer:
    """
    Infers a table's columns from its rows.

    Type rules:
    - no non-null values: "unknown"
    - all booleans: "boolean"
    - all numbers: "integer" when every value is integral, else "float"
    - all text: "string"
    - all dates: "date"
    - anything mixed, or containing arrays/mappings: "string"

    A column is required when every row holds a non-null value for it.
    Required columns come first, each group sorted by name.
    """

    def infer_columns(self, rows: list[Mapping[str, Any]]) -> list[TableColumn]:
        """
        Infer columns from rows.

        Args:
            rows: Output rows, in table order

        Returns:
            Ordered list of TableColumn
        """
        names: set[str] = set()
        for row in rows:
            names.update(row.keys())

        columns = []
        for name in names:
            present = [row[name] for row in rows if name in row]
            required = len(present) == len(rows) and all(value is not None for value in present)
            columns.append(TableColumn(name=name, type=self.infer_column_type(present), required=required))

        return sorted(columns, key=lambda column: (not column.required, column.name))

    def infer_column_type(self, values: list[Any]) -> str:
        """
        Infer a type tag for one column's values.

        Args:
            values: Values of the column in the rows where it is present

        Returns:
            Type tag
        """
        kinds = {self._value_kind(value) for value in values if value is not None}

        if not kinds:
            return "unknown"
        if len(kinds) > 1 or "nested" in kinds:
            return "string"

        kind = kinds.pop()
        if kind == "number":
            numbers = [value for value in values if value is not None]
            return "integer" if all(self._is_integral(value) for value in numbers) else "float"
        return kind

    @staticmethod
    def _value_kind(value: Any) -> str:
        # bool is an int subclass, check it first
        if isinstance(value, bool):
            return "boolean"
        if isinstance(value, (int, float, Decimal)):
            return "number"
        if isinstance(value, str):
            return "string"
        if isinstance(value, (datetime, date)):
            return "date"
        if isinstance(value, (Mapping, list, tuple)):
            return "nested"
        return "string"

    @staticmethod
    def _is_integral(value: Any) -> bool:
        if isinstance(value, int):
            return True
        if isinstance(value, float):
            return math.isfinite(value) and value.is_integer()
        return value == value.to_integral_value()

    def schema_to_dict(self, columns: list[TableColumn]) -> dict[str, Any]:
        """
        Convert inferred columns to dictionary format.

        Args:
            columns: Inferred columns

        Returns:
            Dictionary representation of the schema
        """
        return {
            "fields": [
                {
                    "name": column.name,
                    "type": column.type,
                    "nullable": not column.required
                }
                for column in columns
            ]
        }
