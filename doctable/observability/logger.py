"""
Structured logging for doc-table-mapper

Every module logs through a ``doctable.*`` logger. Records are rendered as
JSON lines (python-json-logger) or plain text, always on stderr so that
tables exported to stdout stay clean.
"""
import logging
import os
import sys
import time
from datetime import datetime, timezone

from pythonjsonlogger import jsonlogger

ROOT_LOGGER = "doctable"

LEVEL_ENV_VARS = ("DOCTABLE_LOG_LEVEL", "LOG_LEVEL")

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(module)s:%(funcName)s] %(message)s"


class MappingJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter with a fixed envelope

    Each line carries: timestamp (UTC, millisecond precision), level, logger,
    location ("module:function"), message and any ``extra`` fields such as
    document_id, field or mapping_type.
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_record["timestamp"] = created.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["location"] = f"{record.module}:{record.funcName}"


def resolve_level(level: str | None = None) -> int:
    """
    Turn a level name into a logging level

    Falls back to DOCTABLE_LOG_LEVEL, then LOG_LEVEL, then INFO. Unknown
    names resolve to INFO.
    """
    if level is None:
        level = next((os.environ[var] for var in LEVEL_ENV_VARS if os.environ.get(var)), "INFO")
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _build_formatter(format_type: str) -> logging.Formatter:
    if format_type == "json":
        return MappingJsonFormatter("%(message)s")
    return logging.Formatter(TEXT_FORMAT)


def setup_logger(
    name: str = ROOT_LOGGER,
    level: str | None = None,
    format_type: str = "json",
) -> logging.Logger:
    """
    Attach a single stderr handler to a logger

    Args:
        name: Logger name
        level: Level name; see ``resolve_level``
        format_type: "json" or "text"

    Returns:
        The configured logger
    """
    log_level = resolve_level(level)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(_build_formatter(format_type))

    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logger(name)
    return logger


def configure_logging(level: str | None = None, format_type: str = "json", root: str = ROOT_LOGGER) -> None:
    """
    Reconfigure the package logger and every module logger below it

    Module loggers are created at import time, so the CLI calls this once
    its arguments are parsed.
    """
    names = {
        name for name in logging.root.manager.loggerDict
        if name == root or name.startswith(f"{root}.")
    }
    for name in names | {root}:
        setup_logger(name, level=level, format_type=format_type)


class log_operation:
    """
    Context manager logging the start and outcome of an operation

    Results known only at the end can be attached with ``add_result`` and
    appear on the completion line.

    Usage:
        with log_operation("Mapping documents", logger=logger, source_name="orders") as op:
            rows = ...
            op.add_result(total_rows=len(rows))
    """

    def __init__(self, operation_name: str, logger: logging.Logger | None = None, **context):
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.context = context
        self.results: dict = {}
        self.started = None

    def add_result(self, **fields) -> None:
        self.results.update(fields)

    def __enter__(self):
        self.started = time.perf_counter()
        self.logger.info(
            f"Starting: {self.operation_name}",
            extra={"operation": self.operation_name, **self.context},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        fields = {
            "operation": self.operation_name,
            "duration_ms": round((time.perf_counter() - self.started) * 1000, 2),
            **self.context,
            **self.results,
        }

        if exc_type is None:
            self.logger.info(f"Completed: {self.operation_name}", extra={"status": "success", **fields})
        else:
            self.logger.error(
                f"Failed: {self.operation_name}",
                extra={
                    "status": "error",
                    "error_type": exc_type.__name__,
                    "error_message": str(exc_val),
                    **fields,
                },
            )
        return False
