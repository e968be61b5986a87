"""
Value transformers used by field mappings.

Provides converters for string, number, boolean, date, array, object
and custom transform kinds.
"""

from .array_transformer import ArrayTransformer
from .base_transformer import BaseTransformer, TransformError
from .boolean_transformer import BooleanTransformer
from .custom_transformer import CustomTransformer
from .date_transformer import DateTransformer
from .number_transformer import NumberTransformer
from .object_transformer import ObjectTransformer
from .string_transformer import StringTransformer

__all__ = [
    "BaseTransformer",
    "TransformError",
    "StringTransformer",
    "NumberTransformer",
    "BooleanTransformer",
    "DateTransformer",
    "ArrayTransformer",
    "ObjectTransformer",
    "CustomTransformer",
]
