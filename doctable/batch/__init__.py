"""
Batch mapping module.
"""

from .pipeline import TableMapper
from .readers import DocumentReader

__all__ = [
    "TableMapper",
    "DocumentReader",
]
