"""
Batch mapping pipeline orchestration.

Coordinates the flow: validate → (expand) → flatten → map → infer columns
"""

from collections.abc import Mapping, Sequence
from typing import Any

from doctable.core.errors import ErrorCollector, ErrorKind, MappingError
from doctable.core.mapping import ArrayExpander, DocumentFlattener, FieldMapper, parse_mapping_config
from doctable.core.models import (
    ExportOptions,
    MappingConfig,
    ProcessingError,
    ProcessingStats,
    TableData,
    TableMetadata,
)
from doctable.core.schema import ColumnInferrer
from doctable.exporters import create_exporter
from doctable.observability.logger import get_logger, log_operation
from doctable.observability.metrics import (
    record_batch_mapping,
    record_document_rows,
    record_failed_document,
    record_mapping_error,
    time_batch,
)
from doctable.utils.validation import validate_document, validate_documents

logger = get_logger(__name__)


class TableMapper:
    """
    Maps a batch of documents into a TableData.

    Flow per document:
    1. Expand the designated array (array_expand mode only)
    2. Flatten each (derived) document
    3. Apply field mappings to produce one row

    After the batch, columns are inferred from all rows.

    Per-document errors are recorded; unless ``skip_invalid_rows`` is set the
    first one aborts the batch. Configuration errors are raised by the
    constructor before any document is read.
    """

    def __init__(self, config: MappingConfig | dict[str, Any]):
        """
        Initialize the mapper.

        Args:
            config: MappingConfig or an equivalent dictionary

        Raises:
            MappingError: CONFIGURATION kind if the configuration is invalid
        """
        self.config = parse_mapping_config(config)
        options = self.config.options

        self.flattener = DocumentFlattener(
            max_depth=options.max_depth,
            exclude_fields=options.exclude_fields,
            preserve_buffer_fields=options.preserve_buffer_fields,
        )
        self.field_mapper = FieldMapper(self.config.field_mappings, options)
        self.expander = None
        if self.config.mapping_type == "array_expand":
            self.expander = ArrayExpander(self.config.array_field, options.preserve_empty_arrays)
        self.column_inferrer = ColumnInferrer()
        self.error_collector = ErrorCollector()
        self._stats = ProcessingStats()

    def map(self, documents: Sequence[Mapping[str, Any]]) -> TableData:
        """
        Map a batch of documents.

        Args:
            documents: Non-empty sequence of documents

        Returns:
            TableData with inferred columns, rows in input order, and metadata

        Raises:
            MappingError: VALIDATION kind for an invalid batch; the first
                          per-document error unless skip_invalid_rows is set
        """
        self.error_collector.clear()
        self._stats = ProcessingStats()
        validate_documents(documents)

        mapping_type = self.config.mapping_type
        skip_invalid = self.config.options.skip_invalid_rows
        rows: list[dict[str, Any]] = []
        skipped = 0

        with log_operation(
            "Mapping documents",
            logger=logger,
            mapping_type=mapping_type,
            source_name=self.config.source_name,
            total_documents=len(documents),
        ) as operation, time_batch(mapping_type):
            for document in documents:
                document_id = self._document_id(document)
                try:
                    document_rows = self.map_document(document, document_id)
                except Exception as e:
                    error = self._record_error(e, document_id)
                    skipped += 1
                    if not skip_invalid:
                        self._update_stats(len(documents), len(rows), skipped)
                        record_failed_document(mapping_type)
                        if error is e:
                            raise
                        raise error from e
                    continue

                rows.extend(document_rows)
                record_document_rows(mapping_type, len(document_rows))

            operation.add_result(total_rows=len(rows), skipped_documents=skipped)

        self._update_stats(len(documents), len(rows), skipped)
        record_batch_mapping(mapping_type, len(documents) - skipped, skipped, len(rows))

        if skipped:
            logger.warning(f"Skipped {skipped} of {len(documents)} documents due to errors")

        return self._create_table(rows)

    def map_document(self, document: Mapping[str, Any], document_id: str | None = None) -> list[dict[str, Any]]:
        """
        Map one document into its output rows.

        Returns one row in flatten mode and one row per array element in
        array_expand mode.
        """
        validate_document(document, document_id)

        if self.expander is not None:
            derived = self.expander.expand(document, document_id)
        else:
            derived = [document]

        return [
            self.field_mapper.apply(self.flattener.flatten(item), document_id)
            for item in derived
        ]

    def _document_id(self, document: Any) -> str | None:
        if not isinstance(document, Mapping):
            return None
        value = document.get(self.config.options.id_field)
        return None if value is None else str(value)

    def _record_error(self, error: Exception, document_id: str | None) -> MappingError:
        if isinstance(error, MappingError):
            mapping_error = error.attribute_to(document_id)
        else:
            mapping_error = MappingError(
                str(error) or type(error).__name__,
                ErrorKind.UNKNOWN,
                document_id=document_id,
                recoverable=True,
            )

        self.error_collector.add(mapping_error)
        record_mapping_error(self.config.mapping_type, mapping_error.code)
        logger.warning(
            f"Failed to map document: {mapping_error.message}",
            extra={
                "document_id": mapping_error.document_id,
                "field": mapping_error.field,
                "error_kind": mapping_error.code,
            },
        )
        return mapping_error

    def _update_stats(self, total_documents: int, processed_rows: int, skipped: int) -> None:
        errors = self.error_collector.get_errors()
        self._stats = ProcessingStats(
            total_documents=total_documents,
            processed_rows=processed_rows,
            skipped_documents=skipped,
            error_count=len(errors),
            errors=[
                ProcessingError(
                    document_id=error.document_id,
                    field=error.field,
                    kind=error.code,
                    message=error.message,
                    recoverable=error.recoverable,
                )
                for error in errors
            ],
        )

    def _create_table(self, rows: list[dict[str, Any]]) -> TableData:
        columns = self.column_inferrer.infer_columns(rows)
        return TableData(
            columns=columns,
            rows=rows,
            metadata=TableMetadata(
                total_rows=len(rows),
                total_columns=len(columns),
                mapping_type=self.config.mapping_type,
                source_name=self.config.source_name,
            ),
        )

    def has_errors(self) -> bool:
        return self.error_collector.has_errors()

    def get_errors(self) -> list[MappingError]:
        return self.error_collector.get_errors()

    def get_stats(self) -> ProcessingStats:
        """Statistics of the most recent ``map`` call (also after an abort)."""
        return self._stats

    def export(self, table: TableData, options: ExportOptions | dict[str, Any] | str) -> str:
        """
        Export a table.

        Args:
            table: Table produced by ``map``
            options: ExportOptions, an equivalent dictionary, or a format name

        Returns:
            Serialized table
        """
        return create_exporter(options).export(table)
