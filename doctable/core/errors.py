"""
Error types raised while mapping documents to tables.

A single exception type carries an ``ErrorKind`` plus the context needed to
locate the offending record: field path, document identifier and whether the
batch can continue past it.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Machine-readable error categories."""

    VALIDATION = "VALIDATION_ERROR"
    TRANSFORMATION = "TRANSFORMATION_ERROR"
    CONFIGURATION = "CONFIGURATION_ERROR"
    EXPORT = "EXPORT_ERROR"
    UNKNOWN = "UNKNOWN_ERROR"


class MappingError(Exception):
    """Raised when a document, field or configuration cannot be mapped."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.UNKNOWN,
        field: str | None = None,
        document_id: str | None = None,
        recoverable: bool | None = None,
    ):
        self.message = message
        self.kind = ErrorKind(kind)
        self.field = field
        self.document_id = document_id
        # Configuration problems abort before any document is touched
        if recoverable is None:
            recoverable = self.kind is not ErrorKind.CONFIGURATION
        self.recoverable = recoverable
        super().__init__(message)

    @classmethod
    def validation(cls, message: str, field: str | None = None, document_id: str | None = None) -> "MappingError":
        return cls(f"Validation failed: {message}", ErrorKind.VALIDATION, field=field, document_id=document_id)

    @classmethod
    def transformation(cls, message: str, field: str, document_id: str | None = None) -> "MappingError":
        return cls(
            f'Transformation failed for field "{field}": {message}',
            ErrorKind.TRANSFORMATION,
            field=field,
            document_id=document_id,
        )

    @classmethod
    def configuration(cls, message: str) -> "MappingError":
        return cls(f"Configuration error: {message}", ErrorKind.CONFIGURATION, recoverable=False)

    @classmethod
    def export(cls, message: str, export_format: str) -> "MappingError":
        return cls(f"Export failed ({export_format}): {message}", ErrorKind.EXPORT)

    @property
    def code(self) -> str:
        return self.kind.value

    def attribute_to(self, document_id: str | None) -> "MappingError":
        """Fill in the document id unless one is already attached."""
        if self.document_id is None:
            self.document_id = document_id
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "field": self.field,
            "document_id": self.document_id,
            "recoverable": self.recoverable,
        }

    def __str__(self) -> str:
        context = []
        if self.field:
            context.append(f"field={self.field}")
        if self.document_id is not None:
            context.append(f"document={self.document_id}")
        if context:
            return f"[{self.code}] {self.message} ({', '.join(context)})"
        return f"[{self.code}] {self.message}"


class ErrorCollector:
    """
    Accumulates per-document errors for one mapping run.

    Errors stay available after a fail-fast abort so the caller can inspect
    everything that happened before it.
    """

    def __init__(self):
        self._errors: list[MappingError] = []

    def add(self, error: MappingError) -> None:
        self._errors.append(error)

    def has_errors(self) -> bool:
        return len(self._errors) > 0

    def get_errors(self) -> list[MappingError]:
        return list(self._errors)

    def clear(self) -> None:
        self._errors = []

    def __len__(self) -> int:
        return len(self._errors)
