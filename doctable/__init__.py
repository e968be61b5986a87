"""
doc-table-mapper: project document-shaped records into flat tables.
"""

from .api import create_mapper, map_documents, quick_export, quick_map
from .batch import DocumentReader, TableMapper
from .core.errors import ErrorCollector, ErrorKind, MappingError
from .core.mapping import MappingConfigBuilder, MappingConfigLoader
from .core.models import (
    ExportOptions,
    FieldMapping,
    MappingConfig,
    MappingOptions,
    ProcessingStats,
    TableColumn,
    TableData,
    TransformRule,
)
from .exporters import create_exporter, export_to_array, export_to_csv, export_to_json

__version__ = "0.1.0"

__all__ = [
    "TableMapper",
    "DocumentReader",
    "create_mapper",
    "map_documents",
    "quick_map",
    "quick_export",
    "MappingError",
    "ErrorKind",
    "ErrorCollector",
    "MappingConfigLoader",
    "MappingConfigBuilder",
    "MappingConfig",
    "MappingOptions",
    "FieldMapping",
    "TransformRule",
    "TableData",
    "TableColumn",
    "ProcessingStats",
    "ExportOptions",
    "create_exporter",
    "export_to_csv",
    "export_to_json",
    "export_to_array",
]
