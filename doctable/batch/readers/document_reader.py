"""
Reader for document batches stored as JSON or JSON-lines files.
"""

import json
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any

from doctable.core.errors import MappingError
from doctable.observability.logger import get_logger

logger = get_logger(__name__)

JSON_LINES_SUFFIXES = (".jsonl", ".ndjson")


def _unwrap_date(raw: Any) -> Any:
    if isinstance(raw, dict) and "$numberLong" in raw:
        raw = int(raw["$numberLong"])
    if isinstance(raw, (int, float)):
        return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
    if isinstance(raw, str):
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            return raw
    return raw


EXTENDED_JSON_WRAPPERS = {
    "$oid": str,
    "$date": _unwrap_date,
    "$numberLong": int,
    "$numberInt": int,
    "$numberDouble": float,
    "$numberDecimal": Decimal,
}


def unwrap_extended_json(value: Any) -> Any:
    """
    Replace relaxed extended-JSON wrappers with native values.

    >>> unwrap_extended_json({"_id": {"$oid": "65a1"}, "n": {"$numberLong": "7"}})
    {'_id': '65a1', 'n': 7}
    """
    if isinstance(value, dict):
        if len(value) == 1:
            (key, inner), = value.items()
            converter = EXTENDED_JSON_WRAPPERS.get(key)
            if converter is not None:
                return converter(inner)
        return {key: unwrap_extended_json(inner) for key, inner in value.items()}
    if isinstance(value, list):
        return [unwrap_extended_json(item) for item in value]
    return value


class DocumentReader:
    """
    Reads a batch of documents from a file.

    Supported layouts: a JSON array of documents, a single JSON document,
    or JSON-lines (".jsonl" / ".ndjson", one document per line).
    """

    def __init__(self, relaxed: bool = True, encoding: str = "utf-8"):
        """
        Initialize reader.

        Args:
            relaxed: Unwrap extended-JSON wrappers ($oid, $date, ...)
            encoding: File encoding
        """
        self.relaxed = relaxed
        self.encoding = encoding

    def read(self, file_path: str | Path) -> list[dict[str, Any]]:
        """
        Read documents from a file.

        Args:
            file_path: Path to the input file

        Returns:
            List of documents

        Raises:
            FileNotFoundError: If the file does not exist
            MappingError: VALIDATION kind if the content is not valid JSON
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {file_path}")

        text = path.read_text(encoding=self.encoding)
        if path.suffix.lower() in JSON_LINES_SUFFIXES:
            documents = self._parse_lines(text, path)
        else:
            documents = self._parse_json(text, path)

        logger.info(f"Read {len(documents)} documents from {path}")
        if self.relaxed:
            return [unwrap_extended_json(document) for document in documents]
        return documents

    def _parse_json(self, text: str, path: Path) -> list[Any]:
        try:
            content = json.loads(text)
        except json.JSONDecodeError as e:
            raise MappingError.validation(f"Invalid JSON in {path}: {e}") from e
        if isinstance(content, list):
            return content
        return [content]

    def _parse_lines(self, text: str, path: Path) -> list[Any]:
        documents = []
        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                documents.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise MappingError.validation(f"Invalid JSON on line {line_number} of {path}: {e}") from e
        return documents
