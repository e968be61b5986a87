"""
Shared helpers.
"""

from .serialization import to_json_text
from .validation import validate_document, validate_documents, validate_file_path

__all__ = [
    "to_json_text",
    "validate_documents",
    "validate_document",
    "validate_file_path",
]
