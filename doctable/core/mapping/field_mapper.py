"""
Field mapping engine: turns a flat document into one output row.

Looks up each rule's source path, applies defaults, null sentinels and
type transforms, and keeps rows two-dimensional by serializing any
remaining array or mapping to compact JSON text.
"""

from collections.abc import Mapping
from typing import Any

from doctable.core.accessors import MISSING, get_nested_value, is_missing
from doctable.core.errors import MappingError
from doctable.core.models import FieldMapping, MappingOptions, TransformRule
from doctable.core.transformers import (
    ArrayTransformer,
    BaseTransformer,
    BooleanTransformer,
    CustomTransformer,
    DateTransformer,
    NumberTransformer,
    ObjectTransformer,
    StringTransformer,
    TransformError,
)
from doctable.utils.serialization import to_json_text


def lookup_flat_value(flat_document: Mapping[str, Any], path: str) -> Any:
    """
    Resolve a dotted path in a flat document.

    Tries the exact key first. Otherwise descends with the nested accessor
    into the longest key prefix holding a verbatim mapping, which is how a
    subtree cut off by the depth limit is stored.
    """
    if path in flat_document:
        return flat_document[path]

    segments = path.split(".")
    for split in range(len(segments) - 1, 0, -1):
        head = ".".join(segments[:split])
        holder = flat_document.get(head)
        if isinstance(holder, Mapping):
            return get_nested_value(holder, ".".join(segments[split:]))
    return MISSING


class FieldMapper:
    """
    Applies field mapping rules to flat documents.

    With ``include_all_fields`` the rules are bypassed and the flat document
    is emitted unchanged.
    """

    TRANSFORMER_REGISTRY: dict[str, type[BaseTransformer]] = {
        "string": StringTransformer,
        "number": NumberTransformer,
        "boolean": BooleanTransformer,
        "date": DateTransformer,
        "array": ArrayTransformer,
        "object": ObjectTransformer,
        "custom": CustomTransformer,
    }

    def __init__(self, field_mappings: list[FieldMapping], options: MappingOptions | None = None):
        """
        Initialize the field mapper.

        Args:
            field_mappings: Rules applied in order; later rules win on target collisions
            options: Run options (pass-through flag, null sentinel, transform defaults)
        """
        self.field_mappings = field_mappings
        self.options = options or MappingOptions()
        parameters = {
            "date_format": self.options.date_format,
            "array_separator": self.options.array_separator,
        }
        self.transformers: dict[str, BaseTransformer] = {
            kind: transformer_class(parameters)
            for kind, transformer_class in self.TRANSFORMER_REGISTRY.items()
        }

    def apply(self, flat_document: Mapping[str, Any], document_id: str | None = None) -> dict[str, Any]:
        """
        Produce the output row for one flat document.

        Args:
            flat_document: Output of the flattener
            document_id: Identifier used for error attribution

        Returns:
            Output row keyed by target field

        Raises:
            MappingError: TRANSFORMATION kind for unknown or failing transforms,
                          VALIDATION kind for an absent required field
        """
        if self.options.include_all_fields:
            return dict(flat_document)

        row: dict[str, Any] = {}
        for mapping in self.field_mappings:
            row[mapping.target_field] = self._map_field(flat_document, mapping, document_id)
        return row

    def _map_field(self, flat_document: Mapping[str, Any], mapping: FieldMapping, document_id: str | None) -> Any:
        transformer = None
        if mapping.transform is not None:
            transformer = self._get_transformer(mapping.transform, mapping.source_field, document_id)

        value = lookup_flat_value(flat_document, mapping.source_field)

        if is_missing(value) or value is None:
            if mapping.has_default:
                return mapping.default_value
            if mapping.required:
                raise MappingError.validation(
                    f"Required field '{mapping.source_field}' is missing",
                    field=mapping.source_field,
                    document_id=document_id,
                )
            return self.options.null_value

        if transformer is not None:
            try:
                return transformer.transform(value, mapping.transform)
            except TransformError as e:
                raise MappingError.transformation(e.message, mapping.source_field, document_id) from e

        # Arrays never survive as array values in a row without an explicit transform
        if isinstance(value, (list, tuple, Mapping)):
            return to_json_text(value)
        return value

    def _get_transformer(self, rule: TransformRule, field: str, document_id: str | None) -> BaseTransformer:
        transformer = self.transformers.get(rule.type)
        if transformer is None:
            raise MappingError.transformation(f"Unknown transform type: {rule.type}", field, document_id)
        return transformer

    def get_mapping_summary(self) -> dict[str, Any]:
        """
        Get summary of configured rules.

        Returns:
            Dictionary with rule counts by transform kind
        """
        by_transform: dict[str, int] = {}
        for mapping in self.field_mappings:
            kind = mapping.transform.type if mapping.transform else "none"
            by_transform[kind] = by_transform.get(kind, 0) + 1
        return {
            "total_mappings": len(self.field_mappings),
            "pass_through": self.options.include_all_fields,
            "mappings_by_transform": by_transform,
        }
