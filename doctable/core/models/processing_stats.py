"""
ProcessingStats model summarising one mapping run (ephemeral).
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class ProcessingError(BaseModel):
    """
    A per-document failure recorded during a run.

    Attributes:
        document_id: Identifier of the failing document (None if it had none)
        field: Offending field path, when known
        kind: Error code ("VALIDATION_ERROR", ...)
        message: Human-readable description
        recoverable: Whether the batch could continue past it
        timestamp: When the error was recorded
    """

    document_id: str | None = None
    field: str | None = None
    kind: str
    message: str
    recoverable: bool = True
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ProcessingStats(BaseModel):
    """
    Counters for one call to ``TableMapper.map``.

    Attributes:
        total_documents: Documents in the input batch
        processed_rows: Rows produced
        skipped_documents: Documents dropped because of errors
        error_count: Number of recorded errors
        errors: The recorded errors, in order
    """

    total_documents: int = Field(0, ge=0)
    processed_rows: int = Field(0, ge=0)
    skipped_documents: int = Field(0, ge=0)
    error_count: int = Field(0, ge=0)
    errors: list[ProcessingError] = Field(default_factory=list)
