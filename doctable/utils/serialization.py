"""
JSON text for table cells and exported documents.

Output is always strict JSON: non-finite numbers become null.
"""

import json
import math
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any


def json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return str(value)


def replace_non_finite(value: Any) -> Any:
    """
    Copy ``value`` with NaN and infinities replaced by None.

    >>> replace_non_finite({"price": float("nan"), "tags": [1.5, float("inf")]})
    {'price': None, 'tags': [1.5, None]}
    """
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, Mapping):
        return {key: replace_non_finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [replace_non_finite(item) for item in value]
    return value


def to_json_document(value: Any, indent: int | None = None) -> str:
    """Serialize an exported document; raises ValueError/TypeError on failure."""
    return json.dumps(
        replace_non_finite(value),
        indent=indent,
        ensure_ascii=False,
        allow_nan=False,
        default=json_default,
    )


def to_json_text(value: Any) -> str:
    """
    Serialize without whitespace between tokens.

    >>> to_json_text(["admin", "developer"])
    '["admin","developer"]'
    """
    return json.dumps(
        replace_non_finite(value),
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=json_default,
    )
