"""
Mapping configuration management.

Loads mapping configurations from YAML files and provides a builder
for assembling them in code.
"""

from pathlib import Path
from typing import Any, Callable

import yaml
from pydantic import ValidationError

from doctable.core.errors import MappingError
from doctable.core.models import FieldMapping, MappingConfig, MappingOptions, TransformRule


def parse_mapping_config(config: MappingConfig | dict[str, Any] | None) -> MappingConfig:
    """
    Validate a configuration object or dictionary into a MappingConfig.

    Raises:
        MappingError: CONFIGURATION kind if the configuration is missing or
                      structurally invalid
    """
    if config is None:
        raise MappingError.configuration("Mapping configuration is required")
    if isinstance(config, MappingConfig):
        parsed = config
    else:
        try:
            parsed = MappingConfig.model_validate(config)
        except ValidationError as e:
            raise MappingError.configuration(str(e)) from e

    if parsed.mapping_type == "array_expand" and not parsed.array_field:
        raise MappingError.configuration("array_field is required when using array_expand")
    if not parsed.field_mappings and not parsed.options.include_all_fields:
        raise MappingError.configuration("field_mappings must not be empty unless include_all_fields is enabled")
    return parsed


class MappingConfigLoader:
    """
    Loads mapping configurations from YAML files.

    Expected YAML format:
    ```yaml
    mapping_type: array_expand
    array_field: comments
    source_name: posts

    field_mappings:
      - source: _id
        target: post_id
      - source: comments[].created
        target: commented_at
        transform:
          type: date
          format: unix
      - source: comments[].user
        target: comment_user
        transform:
          type: custom
          function: normalize_user

    options:
      skip_invalid_rows: true
      null_value: ""
    ```

    ``type: custom`` transforms name a function in the ``custom_transforms``
    registry passed to the loader.
    """

    def __init__(self, config_path: str | Path, custom_transforms: dict[str, Callable[[Any], Any]] | None = None):
        """
        Initialize the mapping config loader.

        Args:
            config_path: Path to the YAML configuration file
            custom_transforms: Named callables available to custom transforms
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Mapping configuration file not found: {config_path}")
        self.custom_transforms = custom_transforms or {}

    def load(self) -> MappingConfig:
        """
        Load and validate the mapping configuration.

        Returns:
            Validated MappingConfig

        Raises:
            MappingError: CONFIGURATION kind if the YAML is invalid
        """
        with open(self.config_path, encoding="utf-8") as f:
            try:
                raw = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise MappingError.configuration(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(raw, dict):
            raise MappingError.configuration("Configuration file must contain a mapping")

        mappings = raw.get("field_mappings") or []
        if not isinstance(mappings, list):
            raise MappingError.configuration("'field_mappings' must be a list")

        config = {
            "mapping_type": raw.get("mapping_type", "flatten"),
            "array_field": raw.get("array_field"),
            "source_name": raw.get("source_name", "unknown"),
            "field_mappings": [self._parse_mapping(entry, idx) for idx, entry in enumerate(mappings)],
            "options": raw.get("options") or {},
        }
        return parse_mapping_config(config)

    def _parse_mapping(self, entry: Any, idx: int) -> dict[str, Any]:
        """
        Parse a single field mapping definition.

        Args:
            entry: The mapping definition from YAML
            idx: Position of the entry (for error messages)

        Returns:
            Dictionary accepted by FieldMapping
        """
        if not isinstance(entry, dict):
            raise MappingError.configuration(f"field_mappings[{idx}] must be a mapping")

        source = entry.get("source", entry.get("source_field"))
        target = entry.get("target", entry.get("target_field"))
        if not source or not target:
            raise MappingError.configuration(f"field_mappings[{idx}] needs both 'source' and 'target'")

        parsed: dict[str, Any] = {
            "source_field": source,
            "target_field": target,
            "required": entry.get("required", False),
        }
        for key in ("default", "default_value"):
            if key in entry:
                parsed["default_value"] = entry[key]

        transform = entry.get("transform")
        if transform is not None:
            parsed["transform"] = self._parse_transform(transform, idx)
        return parsed

    def _parse_transform(self, transform: Any, idx: int) -> dict[str, Any]:
        if isinstance(transform, str):
            transform = {"type": transform}
        if not isinstance(transform, dict) or "type" not in transform:
            raise MappingError.configuration(f"Transform for field_mappings[{idx}] is missing 'type'")

        parsed = {"type": transform["type"], "format": transform.get("format")}
        function_name = transform.get("function")
        if function_name is not None:
            func = self.custom_transforms.get(function_name)
            if func is None:
                raise MappingError.configuration(f"Unknown custom transform function: {function_name}")
            parsed["custom_transform"] = func
        return parsed


class MappingConfigBuilder:
    """
    Programmatically build mapping configurations (for testing or dynamic mappings).
    """

    def __init__(self, mapping_type: str = "flatten", array_field: str | None = None, source_name: str = "unknown"):
        """Initialize an empty configuration."""
        self.mapping_type = mapping_type
        self.array_field = array_field
        self.source_name = source_name
        self.field_mappings: list[FieldMapping] = []
        self.options: dict[str, Any] = {}

    def add_field(
        self,
        source_field: str,
        target_field: str,
        transform: str | None = None,
        format: str | None = None,
        **kwargs,
    ) -> "MappingConfigBuilder":
        """Add a field mapping, optionally with a built-in transform kind."""
        rule = TransformRule(type=transform, format=format) if transform else None
        self.field_mappings.append(
            FieldMapping(source_field=source_field, target_field=target_field, transform=rule, **kwargs)
        )
        return self

    def add_custom(
        self,
        source_field: str,
        target_field: str,
        func: Callable[[Any], Any],
        **kwargs,
    ) -> "MappingConfigBuilder":
        """Add a field mapping with a custom transform callable."""
        rule = TransformRule(type="custom", custom_transform=func)
        self.field_mappings.append(
            FieldMapping(source_field=source_field, target_field=target_field, transform=rule, **kwargs)
        )
        return self

    def with_options(self, **options) -> "MappingConfigBuilder":
        """Set MappingOptions fields."""
        self.options.update(options)
        return self

    def build(self) -> MappingConfig:
        """Build and validate the configuration."""
        try:
            options = MappingOptions(**self.options)
            config = MappingConfig(
                mapping_type=self.mapping_type,
                array_field=self.array_field,
                field_mappings=self.field_mappings,
                source_name=self.source_name,
                options=options,
            )
        except ValidationError as e:
            raise MappingError.configuration(str(e)) from e
        return parse_mapping_config(config)
