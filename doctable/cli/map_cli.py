"""
Command-line interface for mapping document files to tables.

Usage:
    doctable map --input <file> --config <mapping.yaml> [options]
    doctable columns --input <file> [options]
"""

import argparse
import json
import sys

from doctable.batch.pipeline import TableMapper
from doctable.batch.readers import DocumentReader
from doctable.core.errors import MappingError
from doctable.core.mapping import MappingConfigLoader
from doctable.core.models import ExportOptions
from doctable.exporters import EXPORTER_REGISTRY, create_exporter
from doctable.observability.logger import configure_logging, get_logger
from doctable.observability.metrics import write_metrics
from doctable.utils.validation import validate_file_path

logger = get_logger(__name__)


def map_command(args) -> None:
    """
    Execute the map command.

    Args:
        args: Command-line arguments
    """
    logger.info(f"Mapping {args.input} with configuration {args.config}")

    config = MappingConfigLoader(validate_file_path(args.config, "config")).load()
    if args.skip_invalid:
        config.options.skip_invalid_rows = True
    if args.source_name:
        config.source_name = args.source_name

    documents = DocumentReader(relaxed=not args.strict_json).read(validate_file_path(args.input, "input"))

    mapper = TableMapper(config)
    table = mapper.map(documents)

    stats = mapper.get_stats()
    logger.info(
        f"Mapped {stats.total_documents} documents into {stats.processed_rows} rows "
        f"({stats.skipped_documents} skipped, {stats.error_count} errors)"
    )

    exporter = create_exporter(ExportOptions(format=args.format, headers=not args.no_headers))
    if args.output:
        path = exporter.export_to_file(table, args.output)
        logger.info(f"Wrote {table.metadata.total_rows} rows to {path}")
    else:
        sys.stdout.write(exporter.export(table) + "\n")


def columns_command(args) -> None:
    """
    Print the inferred columns of a pass-through mapping as JSON.

    Args:
        args: Command-line arguments
    """
    documents = DocumentReader(relaxed=not args.strict_json).read(validate_file_path(args.input, "input"))
    mapper = TableMapper({
        "mapping_type": "flatten",
        "options": {
            "include_all_fields": True,
            "max_depth": args.max_depth,
            "exclude_fields": args.exclude or [],
            "skip_invalid_rows": True,
        },
    })
    table = mapper.map(documents)
    schema = mapper.column_inferrer.schema_to_dict(table.columns)
    sys.stdout.write(json.dumps(schema, indent=2) + "\n")


COMMANDS = {
    "map": map_command,
    "columns": columns_command,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doctable",
        description="Map document-shaped records to flat tables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Map a JSON export to CSV on stdout
  doctable map --input data/posts.json --config config/post_comments.yaml

  # One row per comment as JSON with metadata, skipping bad documents
  doctable map --input data/posts.jsonl --config config/post_comments.yaml \\
      --format json --skip-invalid --output comments.json

  # Show the columns every field would produce
  doctable columns --input data/posts.json --exclude _id
        """
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: DOCTABLE_LOG_LEVEL, LOG_LEVEL or INFO)")
    parser.add_argument("--log-format", default="json", choices=["json", "text"], help="Log format (default: json)")
    parser.add_argument("--metrics-file", default=None, help="Write Prometheus metrics to this file when done")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    map_parser = subparsers.add_parser("map", help="Map a document file to a table")
    map_parser.add_argument("--input", required=True, help="Path to input JSON / JSON-lines file")
    map_parser.add_argument("--config", required=True, help="Path to mapping configuration YAML file")
    map_parser.add_argument("--format", default="csv", choices=sorted(EXPORTER_REGISTRY), help="Output format (default: csv)")
    map_parser.add_argument("--output", default=None, help="Output file (default: stdout)")
    map_parser.add_argument("--no-headers", action="store_true", help="Omit the header row / metadata envelope")
    map_parser.add_argument("--skip-invalid", action="store_true", help="Skip failing documents instead of aborting")
    map_parser.add_argument("--source-name", default=None, help="Override the source name recorded in metadata")
    map_parser.add_argument("--strict-json", action="store_true", help="Keep extended-JSON wrappers ($oid, $date) as-is")

    columns_parser = subparsers.add_parser("columns", help="Infer the column schema of a document file")
    columns_parser.add_argument("--input", required=True, help="Path to input JSON / JSON-lines file")
    columns_parser.add_argument("--max-depth", type=int, default=10, help="Flattening depth limit (default: 10)")
    columns_parser.add_argument("--exclude", action="append", help="Flattened field to exclude (repeatable)")
    columns_parser.add_argument("--strict-json", action="store_true", help="Keep extended-JSON wrappers ($oid, $date) as-is")

    return parser


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(level=args.log_level, format_type=args.log_format)

    try:
        COMMANDS[args.command](args)
    except FileNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)
    except MappingError as e:
        logger.error(
            f"Mapping failed: {e}",
            extra={"error_code": e.code, "field": e.field, "document_id": e.document_id},
        )
        sys.exit(1)
    finally:
        if args.metrics_file:
            write_metrics(args.metrics_file)


if __name__ == "__main__":
    main()
