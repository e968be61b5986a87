"""
Base exporter interface for table serialization.
"""

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any

from doctable.core.errors import MappingError
from doctable.core.models import ExportOptions, TableData
from doctable.utils.serialization import to_json_text


class BaseExporter(ABC):
    """
    Abstract base class for all exporters.

    Each exporter renders a TableData into one text format.
    """

    def __init__(self, options: ExportOptions | None = None):
        """
        Initialize exporter.

        Args:
            options: Export options (headers, encoding, indent)
        """
        self.options = options or ExportOptions(format=self.format_name)

    @abstractmethod
    def export(self, table: TableData) -> str:
        """
        Serialize a table.

        Raises:
            MappingError: EXPORT kind if the table cannot be serialized
        """
        pass

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the format identifier."""
        pass

    def export_to_file(self, table: TableData, file_path: str | Path) -> Path:
        """
        Serialize a table and write it to a file.

        Returns:
            The path written
        """
        content = self.export(table)
        path = Path(file_path)
        try:
            path.write_text(content, encoding=self.options.encoding)
        except (OSError, LookupError) as e:
            raise MappingError.export(f"cannot write {path}: {e}", self.format_name) from e
        return path

    @staticmethod
    def format_value(value: Any) -> str:
        """Render a cell value as text."""
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float) and math.isnan(value):
            return "NaN"
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, (Mapping, list, tuple)):
            return to_json_text(value)
        return str(value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(headers={self.options.headers})"
