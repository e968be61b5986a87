"""
JSONExporter - table with metadata envelope, or bare rows.
"""

from doctable.core.errors import MappingError
from doctable.core.models import TableData
from doctable.utils.serialization import to_json_document

from .base_exporter import BaseExporter


class JSONExporter(BaseExporter):
    """
    With headers: {"metadata": ..., "columns": [...], "data": [...]}.
    Without headers: the list of rows.
    """

    def export(self, table: TableData) -> str:
        if self.options.headers:
            payload = {
                "metadata": table.metadata.model_dump(mode="json"),
                "columns": [column.model_dump() for column in table.columns],
                "data": table.rows,
            }
        else:
            payload = table.rows

        try:
            return to_json_document(payload, self.options.indent)
        except (TypeError, ValueError) as e:
            raise MappingError.export(str(e), self.format_name) from e

    @property
    def format_name(self) -> str:
        return "json"
