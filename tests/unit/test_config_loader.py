"""
Unit tests for configuration parsing, YAML loading and the builder.
"""

from pathlib import Path

import pytest

from doctable.core.errors import ErrorKind, MappingError
from doctable.core.mapping import MappingConfigBuilder, MappingConfigLoader, parse_mapping_config

SAMPLE_CONFIG = Path(__file__).resolve().parents[2] / "config" / "post_comments.yaml"


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "mapping.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestParseMappingConfig:
    """Tests for parse_mapping_config"""

    def test_none_rejected(self):
        with pytest.raises(MappingError) as exc_info:
            parse_mapping_config(None)
        assert exc_info.value.kind is ErrorKind.CONFIGURATION

    def test_array_expand_requires_array_field(self):
        with pytest.raises(MappingError) as exc_info:
            parse_mapping_config({
                "mapping_type": "array_expand",
                "field_mappings": [{"source_field": "a", "target_field": "a"}],
            })
        assert "array_field is required" in exc_info.value.message

    def test_empty_mappings_rejected_without_pass_through(self):
        with pytest.raises(MappingError):
            parse_mapping_config({"mapping_type": "flatten"})

    def test_empty_mappings_allowed_with_pass_through(self):
        config = parse_mapping_config({"options": {"include_all_fields": True}})
        assert config.field_mappings == []

    def test_structural_errors_become_configuration_errors(self):
        with pytest.raises(MappingError) as exc_info:
            parse_mapping_config({"mapping_type": "pivot", "field_mappings": []})
        assert exc_info.value.kind is ErrorKind.CONFIGURATION
        assert exc_info.value.recoverable is False


class TestMappingConfigLoader:
    """Tests for MappingConfigLoader"""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            MappingConfigLoader(tmp_path / "absent.yaml")

    def test_loads_sample_config(self):
        config = MappingConfigLoader(SAMPLE_CONFIG).load()
        assert config.mapping_type == "array_expand"
        assert config.array_field == "comments"
        targets = [mapping.target_field for mapping in config.field_mappings]
        assert targets[0] == "post_id"
        assert "comment_likes" in targets

    def test_short_and_long_keys(self, tmp_path):
        path = _write(tmp_path, """
field_mappings:
  - source: _id
    target: id
    required: true
  - source_field: status
    target_field: status
    default: active
  - source: price
    target: price
    transform: number
  - source: created
    target: created
    transform:
      type: date
      format: unix
options:
  null_value: ""
""")
        config = MappingConfigLoader(path).load()
        mappings = config.field_mappings

        assert mappings[0].required is True
        assert mappings[1].has_default and mappings[1].default_value == "active"
        assert mappings[2].transform.type == "number"
        assert mappings[3].transform.format == "unix"
        assert config.options.null_value == ""

    def test_custom_function_registry(self, tmp_path):
        path = _write(tmp_path, """
field_mappings:
  - source: name
    target: name
    transform:
      type: custom
      function: shout
""")
        config = MappingConfigLoader(path, custom_transforms={"shout": str.upper}).load()
        assert config.field_mappings[0].transform.custom_transform is str.upper

    def test_unknown_custom_function(self, tmp_path):
        path = _write(tmp_path, """
field_mappings:
  - source: name
    target: name
    transform: {type: custom, function: missing}
""")
        with pytest.raises(MappingError) as exc_info:
            MappingConfigLoader(path).load()
        assert exc_info.value.kind is ErrorKind.CONFIGURATION

    def test_entry_without_target(self, tmp_path):
        path = _write(tmp_path, "field_mappings:\n  - source: a\n")
        with pytest.raises(MappingError):
            MappingConfigLoader(path).load()

    def test_invalid_yaml(self, tmp_path):
        path = _write(tmp_path, "field_mappings: [unclosed\n")
        with pytest.raises(MappingError):
            MappingConfigLoader(path).load()

    def test_non_mapping_document(self, tmp_path):
        path = _write(tmp_path, "- just\n- a list\n")
        with pytest.raises(MappingError):
            MappingConfigLoader(path).load()


class TestMappingConfigBuilder:
    """Tests for MappingConfigBuilder"""

    def test_build(self):
        config = (
            MappingConfigBuilder(mapping_type="array_expand", array_field="items[]", source_name="orders")
            .add_field("_id", "order_id", required=True)
            .add_field("items[].price", "price", transform="number")
            .add_field("created", "created", transform="date", format="date")
            .add_custom("items[].sku", "sku", str.lower)
            .with_options(skip_invalid_rows=True)
            .build()
        )

        assert config.normalized_array_field == "items"
        assert config.source_name == "orders"
        assert len(config.field_mappings) == 4
        assert config.field_mappings[2].transform.format == "date"
        assert config.field_mappings[3].transform.type == "custom"
        assert config.options.skip_invalid_rows is True

    def test_invalid_option(self):
        with pytest.raises(MappingError):
            MappingConfigBuilder().add_field("a", "a").with_options(max_depth=-5).build()
