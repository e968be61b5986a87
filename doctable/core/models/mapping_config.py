"""
MappingConfig and MappingOptions models for a document-to-table mapping run.
"""

from typing import Literal

from pydantic import BaseModel, Field

from .field_mapping import FieldMapping

MappingType = Literal["flatten", "array_expand"]


class MappingOptions(BaseModel):
    """
    Tuning knobs shared by every mapping mode.

    Attributes:
        include_all_fields: Emit the flattened document unchanged (pass-through)
        exclude_fields: Flattened keys dropped by exact name
        max_depth: Nesting depth beyond which subtrees are stored verbatim
        date_format: Default serialization for "date" transforms
        null_value: Sentinel written for absent values (None keeps nulls)
        array_separator: Default separator for "array" transforms on text
        skip_invalid_rows: Record failing documents and continue instead of aborting
        preserve_buffer_fields: Keep binary-buffer-shaped paths (".buffer", ".buffer.<n>")
        preserve_empty_arrays: In array_expand mode, emit one row with a null
                               element for an empty array instead of none
        id_field: Document field used to attribute errors
    """

    include_all_fields: bool = False
    exclude_fields: list[str] = Field(default_factory=list)
    max_depth: int = Field(10, ge=0)
    date_format: str = "ISO"
    null_value: str | None = None
    array_separator: str = Field(",", min_length=1)
    skip_invalid_rows: bool = False
    preserve_buffer_fields: bool = False
    preserve_empty_arrays: bool = False
    id_field: str = "_id"


class MappingConfig(BaseModel):
    """
    Complete configuration for mapping a batch of documents.

    Attributes:
        mapping_type: "flatten" (one row per document) or "array_expand"
                      (one row per element of array_field)
        array_field: Dotted path of the array to expand; a trailing "[]" is allowed
        field_mappings: Source-to-column rules, applied in order
        source_name: Label recorded in the table metadata
        options: MappingOptions
    """

    mapping_type: MappingType = "flatten"
    array_field: str | None = None
    field_mappings: list[FieldMapping] = Field(default_factory=list)
    source_name: str = "unknown"
    options: MappingOptions = Field(default_factory=MappingOptions)

    @property
    def normalized_array_field(self) -> str | None:
        """Array path with any trailing "[]" marker stripped."""
        if self.array_field is None:
            return None
        if self.array_field.endswith("[]"):
            return self.array_field[:-2]
        return self.array_field

    class Config:
        json_schema_extra = {
            "example": {
                "mapping_type": "array_expand",
                "array_field": "comments",
                "field_mappings": [
                    {"source_field": "_id", "target_field": "post_id"},
                    {"source_field": "comments[].user", "target_field": "comment_user"}
                ],
                "source_name": "posts",
                "options": {"skip_invalid_rows": True}
            }
        }
