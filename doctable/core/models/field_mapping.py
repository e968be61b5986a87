"""
FieldMapping and TransformRule models describing how one source path becomes one output column.
"""

from typing import Any, Callable

from pydantic import BaseModel, Field


class TransformRule(BaseModel):
    """
    Type conversion applied to a mapped value.

    The kind is kept as free text: an unknown kind is reported when the rule
    is applied to a document, not when the configuration is built.

    Attributes:
        type: "string", "number", "boolean", "date", "array", "object" or "custom"
        format: Date serialization ("ISO", "unix", "date", "datetime") or the
                split separator for "array"
        custom_transform: Callable used by "custom" rules
    """

    type: str = Field(..., min_length=1)
    format: str | None = None
    custom_transform: Callable[[Any], Any] | None = None

    class Config:
        json_schema_extra = {
            "example": {
                "type": "date",
                "format": "unix"
            }
        }


class FieldMapping(BaseModel):
    """
    Maps one dotted source path onto a named output column.

    Attributes:
        source_field: Dotted path in the flattened document ("user.profile.name",
                      "comments[].text")
        target_field: Output column name
        transform: Optional type conversion
        required: Fail the document when the value is absent and no default is set
        default_value: Used when the source value is absent or null; counts as
                       configured whenever it is set explicitly, even to None
    """

    source_field: str = Field(..., min_length=1)
    target_field: str = Field(..., min_length=1)
    transform: TransformRule | None = None
    required: bool = False
    default_value: Any = None

    @property
    def has_default(self) -> bool:
        return "default_value" in self.model_fields_set

    class Config:
        json_schema_extra = {
            "example": {
                "source_field": "user.profile.email",
                "target_field": "email",
                "transform": {"type": "string"},
                "required": True
            }
        }
