"""
Table exporters for csv, json and array-of-arrays output.
"""

from typing import Any

from pydantic import ValidationError

from doctable.core.errors import MappingError
from doctable.core.models import ExportOptions, TableData

from .array_exporter import ArrayExporter
from .base_exporter import BaseExporter
from .csv_exporter import CSVExporter
from .json_exporter import JSONExporter

EXPORTER_REGISTRY: dict[str, type[BaseExporter]] = {
    "csv": CSVExporter,
    "json": JSONExporter,
    "array": ArrayExporter,
}


def create_exporter(options: ExportOptions | dict[str, Any] | str) -> BaseExporter:
    """
    Build the exporter for a format.

    Args:
        options: ExportOptions, an equivalent dictionary, or a format name

    Raises:
        MappingError: CONFIGURATION kind for an unknown format
    """
    if isinstance(options, str):
        options = ExportOptions(format=options)
    elif not isinstance(options, ExportOptions):
        try:
            options = ExportOptions.model_validate(options)
        except ValidationError as e:
            raise MappingError.configuration(str(e)) from e

    exporter_class = EXPORTER_REGISTRY.get(options.format)
    if exporter_class is None:
        raise MappingError.configuration(f"Unknown export format: {options.format}")
    return exporter_class(options)


def export_to_csv(table: TableData, **options) -> str:
    return create_exporter(ExportOptions(format="csv", **options)).export(table)


def export_to_json(table: TableData, **options) -> str:
    return create_exporter(ExportOptions(format="json", **options)).export(table)


def export_to_array(table: TableData, **options) -> str:
    return create_exporter(ExportOptions(format="array", **options)).export(table)


__all__ = [
    "BaseExporter",
    "CSVExporter",
    "JSONExporter",
    "ArrayExporter",
    "EXPORTER_REGISTRY",
    "create_exporter",
    "export_to_csv",
    "export_to_json",
    "export_to_array",
]
