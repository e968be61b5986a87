"""
ArrayExporter - array of arrays in column order.
"""

from typing import Any

from doctable.core.errors import MappingError
from doctable.core.models import TableData
from doctable.utils.serialization import to_json_document

from .base_exporter import BaseExporter


class ArrayExporter(BaseExporter):
    """
    With headers: [columnNames, row1Values, ...]. Without: rows only.

    Values follow column order and a key missing from a row is null, so
    ``dict(zip(header, values))`` reconstructs every row.
    """

    def to_arrays(self, table: TableData) -> list[list[Any]]:
        names = table.column_names
        values = [[row.get(name) for name in names] for row in table.rows]
        if self.options.headers and table.rows:
            return [names, *values]
        return values

    def export(self, table: TableData) -> str:
        try:
            return to_json_document(self.to_arrays(table), self.options.indent)
        except (TypeError, ValueError) as e:
            raise MappingError.export(str(e), self.format_name) from e

    @property
    def format_name(self) -> str:
        return "array"
