"""
CSVExporter - delimited text with minimal quoting.
"""

import csv
import io

from doctable.core.models import TableData

from .base_exporter import BaseExporter


class CSVExporter(BaseExporter):
    """
    Writes one line per row in column order, preceded by a header line
    unless headers are disabled. Fields containing the separator, quotes or
    newlines are quoted. An empty table exports as "".
    """

    separator = ","

    def export(self, table: TableData) -> str:
        if not table.rows:
            return ""

        buffer = io.StringIO()
        writer = csv.writer(buffer, delimiter=self.separator, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")

        names = table.column_names
        if self.options.headers:
            writer.writerow(names)
        for row in table.rows:
            writer.writerow([self.format_value(row.get(name)) for name in names])

        return buffer.getvalue().removesuffix("\n")

    @property
    def format_name(self) -> str:
        return "csv"
