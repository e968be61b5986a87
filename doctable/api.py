"""
Convenience entry points for one-off mappings and exports.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from doctable.batch.pipeline import TableMapper
from doctable.core.models import ExportOptions, FieldMapping, MappingConfig, TableData
from doctable.exporters import create_exporter


def create_mapper(config: MappingConfig | dict[str, Any]) -> TableMapper:
    return TableMapper(config)


def map_documents(documents: Sequence[Mapping[str, Any]], config: MappingConfig | dict[str, Any]) -> TableData:
    """Map a batch with a fresh mapper."""
    return TableMapper(config).map(documents)


def quick_map(
    documents: Sequence[Mapping[str, Any]],
    mapping_type: str = "flatten",
    array_field: str | None = None,
    field_mappings: list[FieldMapping | dict[str, Any]] | None = None,
    source_name: str = "unknown",
    **options,
) -> TableData:
    """
    Map documents from keyword arguments.

    Remaining keyword arguments become MappingOptions, e.g.
    ``quick_map(docs, include_all_fields=True, exclude_fields=["_id"])``.
    """
    config = {
        "mapping_type": mapping_type,
        "array_field": array_field,
        "field_mappings": field_mappings or [],
        "source_name": source_name,
        "options": options,
    }
    return map_documents(documents, config)


def quick_export(table: TableData, format: str, **options) -> str:
    """Export a table; keyword arguments become ExportOptions."""
    return create_exporter(ExportOptions(format=format, **options)).export(table)
