"""
Prometheus metrics for doc-table-mapper

Counts documents, produced rows and per-document errors for each mapping
mode, and times whole batches. Metrics live in a dedicated registry so
that embedding applications keep their own default registry untouched.
"""
from pathlib import Path

from prometheus_client import CollectorRegistry, Counter, Histogram, write_to_textfile

REGISTRY = CollectorRegistry()


# =======================
# MAPPING METRICS
# =======================

documents_processed_total = Counter(
    name="doctable_documents_processed_total",
    documentation="Input documents seen by the mapper",
    labelnames=["mapping_type", "status"],  # status: mapped, skipped, failed
    registry=REGISTRY,
)

rows_generated_total = Counter(
    name="doctable_rows_generated_total",
    documentation="Output rows produced",
    labelnames=["mapping_type"],
    registry=REGISTRY,
)

# Row multiplication; always 1 in flatten mode
rows_per_document = Histogram(
    name="doctable_rows_per_document",
    documentation="Output rows produced from a single input document",
    labelnames=["mapping_type"],
    buckets=[0, 1, 2, 5, 10, 50, 100, 500, 1000],
    registry=REGISTRY,
)

mapping_duration_seconds = Histogram(
    name="doctable_mapping_duration_seconds",
    documentation="Wall time spent mapping one batch",
    labelnames=["mapping_type"],
    buckets=[0.001, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 30.0],
    registry=REGISTRY,
)

# =======================
# ERROR METRICS
# =======================

mapping_errors_total = Counter(
    name="doctable_mapping_errors_total",
    documentation="Per-document mapping errors by error code",
    labelnames=["mapping_type", "error_kind"],
    registry=REGISTRY,
)


# =======================
# RECORDING HELPERS
# =======================

def time_batch(mapping_type: str):
    """Timer context for one batch, observed into mapping_duration_seconds."""
    return mapping_duration_seconds.labels(mapping_type=mapping_type).time()


def record_document_rows(mapping_type: str, row_count: int) -> None:
    rows_per_document.labels(mapping_type=mapping_type).observe(row_count)


def record_mapping_error(mapping_type: str, error_kind: str) -> None:
    mapping_errors_total.labels(mapping_type=mapping_type, error_kind=error_kind).inc()


def record_failed_document(mapping_type: str) -> None:
    """Count the document that aborted a fail-fast batch."""
    documents_processed_total.labels(mapping_type=mapping_type, status="failed").inc()


def record_batch_mapping(
    mapping_type: str,
    mapped_documents: int,
    skipped_documents: int,
    total_rows: int,
) -> None:
    """
    Record the outcome of a completed batch.

    Args:
        mapping_type: "flatten" or "array_expand"
        mapped_documents: Documents that produced rows without error
        skipped_documents: Documents skipped because of errors
        total_rows: Rows in the produced table
    """
    documents_processed_total.labels(mapping_type=mapping_type, status="mapped").inc(mapped_documents)
    documents_processed_total.labels(mapping_type=mapping_type, status="skipped").inc(skipped_documents)
    rows_generated_total.labels(mapping_type=mapping_type).inc(total_rows)


def write_metrics(path: str | Path) -> None:
    """
    Dump the registry in Prometheus text format, e.g. for the node
    exporter's textfile collector.
    """
    write_to_textfile(str(path), REGISTRY)
