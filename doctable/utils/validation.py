"""
Input validation utilities for the mapper.

Provides reusable checks for document batches and file paths.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from doctable.core.errors import MappingError


def validate_documents(documents: Any) -> Sequence[Any]:
    """
    Validate an input batch.

    The batch must be a non-empty sequence. Individual items are checked
    per document by the mapper so that one bad item can be skipped.

    Args:
        documents: The batch to validate

    Returns:
        The batch, unchanged

    Raises:
        MappingError: VALIDATION kind if the batch is not a sequence or is empty

    Examples:
        >>> validate_documents([{"_id": 1}])
        [{'_id': 1}]
        >>> validate_documents([])  # doctest: +SKIP
        MappingError: Validation failed: Input data array cannot be empty
    """
    if not isinstance(documents, Sequence) or isinstance(documents, (str, bytes)):
        raise MappingError.validation("Input data must be an array")

    if len(documents) == 0:
        raise MappingError.validation("Input data array cannot be empty")

    return documents


def validate_document(document: Any, document_id: str | None = None) -> Mapping[str, Any]:
    """
    Validate a single batch item.

    Raises:
        MappingError: VALIDATION kind if the item is not a mapping
    """
    if not isinstance(document, Mapping):
        raise MappingError.validation(
            f"Document must be a mapping, got {type(document).__name__}",
            document_id=document_id,
        )
    return document


def validate_file_path(file_path: str, field_name: str = "file_path") -> str:
    """
    Validate a file path.

    Args:
        file_path: The file path to validate
        field_name: Name of the field (for error messages)

    Returns:
        The validated file path (stripped of whitespace)

    Raises:
        MappingError: VALIDATION kind if validation fails

    Examples:
        >>> validate_file_path("/data/orders.json")
        '/data/orders.json'
    """
    if not file_path or not isinstance(file_path, str):
        raise MappingError.validation(f"{field_name} must be a non-empty string", field=field_name)

    file_path = file_path.strip()

    if not file_path:
        raise MappingError.validation(f"{field_name} cannot be empty or whitespace-only", field=field_name)

    if "\x00" in file_path:
        raise MappingError.validation(f"{field_name} contains null bytes", field=field_name)

    # Linux PATH_MAX
    if len(file_path) > 4096:
        raise MappingError.validation(f"{field_name} exceeds maximum length of 4096 characters", field=field_name)

    return file_path
