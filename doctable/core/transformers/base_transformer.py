"""
Base transformer interface for all value conversions.

All transformers inherit from BaseTransformer and implement transform().
"""

from abc import ABC, abstractmethod
from typing import Any

from doctable.core.models import TransformRule


class TransformError(Exception):
    """Raised when a transformer cannot convert a value."""

    def __init__(self, kind: str, message: str):
        self.kind = kind
        self.message = message
        super().__init__(f"[{kind}] {message}")


class BaseTransformer(ABC):
    """
    Abstract base class for all transformers.

    Transformers are pure: they never mutate their input and accept None,
    returning the empty value of their kind.
    """

    def __init__(self, parameters: dict[str, Any] | None = None):
        """
        Initialize transformer.

        Args:
            parameters: Run-wide defaults (e.g. date_format, array_separator)
                        used when a rule does not set its own format
        """
        self.parameters = parameters or {}

    @abstractmethod
    def transform(self, value: Any, rule: TransformRule | None = None) -> Any:
        """
        Convert a value.

        Args:
            value: The value to convert
            rule: The rule being applied (for format and custom callables)

        Returns:
            The converted value

        Raises:
            TransformError: If the value cannot be converted at all
        """
        pass

    @property
    @abstractmethod
    def kind(self) -> str:
        """Return the transform kind identifier."""
        pass

    def _format(self, rule: TransformRule | None, parameter: str, default: str) -> str:
        if rule is not None and rule.format:
            return rule.format
        return self.parameters.get(parameter) or default

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(params={self.parameters})"
