"""
ExportOptions model for table exporters.
"""

from pydantic import BaseModel


class ExportOptions(BaseModel):
    """
    Attributes:
        format: "csv", "json" or "array"; checked by the exporter factory
        headers: Include a header row (csv/array) or the metadata envelope (json)
        encoding: Encoding used when writing to a file
        indent: JSON indentation for the json/array formats
    """

    format: str = "csv"
    headers: bool = True
    encoding: str = "utf-8"
    indent: int | None = 2
