"""
Core data models for the document-to-table mapper.

All models use Pydantic for runtime validation and type safety.
"""

from .export_options import ExportOptions
from .field_mapping import FieldMapping, TransformRule
from .mapping_config import MappingConfig, MappingOptions, MappingType
from .processing_stats import ProcessingError, ProcessingStats
from .table_data import ColumnType, TableColumn, TableData, TableMetadata

__all__ = [
    "TransformRule",
    "FieldMapping",
    "MappingOptions",
    "MappingConfig",
    "MappingType",
    "TableColumn",
    "TableMetadata",
    "TableData",
    "ColumnType",
    "ProcessingError",
    "ProcessingStats",
    "ExportOptions",
]
