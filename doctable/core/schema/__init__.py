"""
Column schema inference.
"""

from .inference import ColumnInferrer

__all__ = [
    "ColumnInferrer",
]
