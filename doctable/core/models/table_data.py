"""
TableData model: the column schema, rows and metadata produced by a mapping run.
"""

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field

ColumnType = Literal["string", "integer", "float", "boolean", "date", "unknown"]


class TableColumn(BaseModel):
    """
    One inferred output column.

    Attributes:
        name: Column name (an output row key)
        type: Inferred type tag
        required: True when every row holds a non-null value for the column
    """

    name: str
    type: ColumnType = "unknown"
    required: bool = False

    class Config:
        frozen = True


class TableMetadata(BaseModel):
    """
    Attributes:
        total_rows: Number of rows
        total_columns: Number of columns
        mapping_type: Mode used to produce the rows
        source_name: Label of the source collection
        generated_at: UTC timestamp of table creation
    """

    total_rows: int = Field(..., ge=0)
    total_columns: int = Field(..., ge=0)
    mapping_type: Literal["flatten", "array_expand"]
    source_name: str = "unknown"
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        frozen = True


class TableData(BaseModel):
    """
    Terminal artifact of a mapping run, handed unchanged to exporters.

    Row order follows input order (and element order inside an expanded
    array); column order is required columns first, then by name.
    """

    columns: list[TableColumn] = Field(default_factory=list)
    rows: list[dict[str, Any]] = Field(default_factory=list)
    metadata: TableMetadata

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "columns": [
                    {"name": "id", "type": "integer", "required": True},
                    {"name": "user_name", "type": "string", "required": True}
                ],
                "rows": [{"id": 1, "user_name": "John"}],
                "metadata": {
                    "total_rows": 1,
                    "total_columns": 2,
                    "mapping_type": "flatten",
                    "source_name": "users"
                }
            }
        }
