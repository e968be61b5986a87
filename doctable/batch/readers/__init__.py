"""
Batch document readers.
"""

from .document_reader import DocumentReader, unwrap_extended_json

__all__ = [
    "DocumentReader",
    "unwrap_extended_json",
]
