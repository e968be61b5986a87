"""
Document flattening, array expansion and field mapping.
"""

from .config_loader import MappingConfigBuilder, MappingConfigLoader, parse_mapping_config
from .expander import ArrayExpander, normalize_array_path
from .field_mapper import FieldMapper, lookup_flat_value
from .flattener import DocumentFlattener, flatten_document, is_buffer_field

__all__ = [
    "flatten_document",
    "is_buffer_field",
    "DocumentFlattener",
    "ArrayExpander",
    "normalize_array_path",
    "FieldMapper",
    "lookup_flat_value",
    "MappingConfigLoader",
    "MappingConfigBuilder",
    "parse_mapping_config",
]
