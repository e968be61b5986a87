"""
Integration tests for the complete mapping pipeline.

Tests the flow: validate → expand → flatten → map → infer columns → export
"""

import json
from collections.abc import Mapping

import pytest

from doctable import MappingConfigBuilder, TableMapper, quick_export, quick_map
from doctable.core.errors import ErrorKind, MappingError
from doctable.observability.metrics import REGISTRY


def _fields(*pairs):
    return [{"source_field": source, "target_field": target} for source, target in pairs]


class ExplodingDocument(Mapping):
    """A mapping that raises an unexpected error when traversed"""

    def __init__(self, data):
        self._data = data

    def __getitem__(self, key):
        return self._data[key]

    def __len__(self):
        return len(self._data)

    def __iter__(self):
        raise RuntimeError("cursor lost")


@pytest.mark.integration
class TestFlattenMode:
    """Flatten mode end to end"""

    def test_renames_fields(self):
        mapper = TableMapper({
            "field_mappings": _fields(("_id", "id"), ("name", "user_name"), ("age", "user_age")),
        })
        table = mapper.map([{"_id": 1, "name": "John", "age": 30}])

        assert table.rows == [{"id": 1, "user_name": "John", "user_age": 30}]
        assert table.metadata.total_rows == 1
        assert table.metadata.total_columns == 3
        assert table.metadata.mapping_type == "flatten"
        assert {column.name: column.type for column in table.columns} == {
            "id": "integer",
            "user_name": "string",
            "user_age": "integer",
        }

    def test_array_value_becomes_json_text(self):
        table = TableMapper({"field_mappings": _fields(("_id", "_id"), ("tags", "user_tags"))}).map(
            [{"_id": 1, "tags": ["admin", "developer"]}]
        )
        assert table.rows[0]["user_tags"] == '["admin","developer"]'

    def test_nested_paths(self, blog_posts):
        table = TableMapper({
            "field_mappings": _fields(("author.name", "author"), ("author.profile.country", "country")),
        }).map(blog_posts)
        assert table.rows == [
            {"author": "Ann", "country": "NZ"},
            {"author": "Ben", "country": "AU"},
        ]

    def test_transforms(self):
        config = (
            MappingConfigBuilder()
            .add_field("price", "price", transform="number")
            .add_field("active", "active", transform="boolean")
            .build()
        )
        table = TableMapper(config).map([{"price": "29.99", "active": "false"}])

        assert table.rows == [{"price": 29.99, "active": False}]
        columns = {column.name: column.type for column in table.columns}
        assert columns == {"price": "float", "active": "boolean"}

    def test_null_sentinel(self):
        table = TableMapper({
            "field_mappings": _fields(("_id", "id"), ("email", "email")),
            "options": {"null_value": "N/A"},
        }).map([{"_id": 1}, {"_id": 2, "email": None}])
        assert [row["email"] for row in table.rows] == ["N/A", "N/A"]

    def test_depth_limited_subtree_is_reachable(self):
        table = TableMapper({
            "field_mappings": _fields(("a.b.c", "deep")),
            "options": {"max_depth": 0},
        }).map([{"a": {"b": {"c": 5}}}])
        assert table.rows == [{"deep": 5}]


@pytest.mark.integration
class TestArrayExpandMode:
    """Array-expand mode end to end"""

    def test_one_row_per_comment(self):
        mapper = TableMapper({
            "mapping_type": "array_expand",
            "array_field": "comments",
            "source_name": "posts",
            "field_mappings": _fields(
                ("_id", "post_id"),
                ("comments[].user", "comment_user"),
                ("comments[].text", "comment_text"),
            ),
        })
        table = mapper.map([{
            "_id": "doc1",
            "title": "First Post",
            "comments": [{"user": "Alice", "text": "Great!"}, {"user": "Bob", "text": "Nice!"}],
        }])

        assert table.rows == [
            {"post_id": "doc1", "comment_user": "Alice", "comment_text": "Great!"},
            {"post_id": "doc1", "comment_user": "Bob", "comment_text": "Nice!"},
        ]
        assert table.metadata.mapping_type == "array_expand"
        assert table.metadata.source_name == "posts"

    def test_row_multiplication_across_documents(self, blog_posts):
        table = TableMapper({
            "mapping_type": "array_expand",
            "array_field": "comments[]",
            "field_mappings": _fields(("_id", "post_id"), ("comments[].likes", "likes")),
        }).map(blog_posts)

        assert [row["post_id"] for row in table.rows] == ["doc1", "doc1", "doc2"]
        assert [row["likes"] for row in table.rows] == [3, 1, 0]

    def test_missing_array_aborts_by_default(self, blog_posts):
        del blog_posts[1]["comments"]
        mapper = TableMapper({
            "mapping_type": "array_expand",
            "array_field": "comments",
            "field_mappings": _fields(("_id", "post_id")),
        })

        with pytest.raises(MappingError) as exc_info:
            mapper.map(blog_posts)

        assert exc_info.value.kind is ErrorKind.VALIDATION
        assert exc_info.value.document_id == "doc2"
        assert mapper.has_errors()
        stats = mapper.get_stats()
        assert stats.total_documents == 2
        assert stats.skipped_documents == 1
        assert stats.error_count == 1

    def test_missing_array_skipped_when_enabled(self, blog_posts):
        del blog_posts[0]["comments"]
        mapper = TableMapper({
            "mapping_type": "array_expand",
            "array_field": "comments",
            "field_mappings": _fields(("_id", "post_id"), ("comments[].user", "user")),
            "options": {"skip_invalid_rows": True},
        })
        table = mapper.map(blog_posts)

        assert table.rows == [{"post_id": "doc2", "user": "Carol"}]
        errors = mapper.get_errors()
        assert len(errors) == 1
        assert errors[0].document_id == "doc1"
        assert errors[0].field == "comments"

        stats = mapper.get_stats()
        assert stats.processed_rows == 1
        assert stats.skipped_documents == 1
        assert stats.errors[0].kind == "VALIDATION_ERROR"

    def test_empty_array_contributes_no_rows(self, blog_posts):
        blog_posts[1]["comments"] = []
        table = TableMapper({
            "mapping_type": "array_expand",
            "array_field": "comments",
            "field_mappings": _fields(("_id", "post_id")),
        }).map(blog_posts)
        assert [row["post_id"] for row in table.rows] == ["doc1", "doc1"]

    def test_config_file(self, blog_posts):
        from pathlib import Path

        from doctable import MappingConfigLoader

        config_path = Path(__file__).resolve().parents[2] / "config" / "post_comments.yaml"
        table = TableMapper(MappingConfigLoader(config_path).load()).map(blog_posts)

        assert table.metadata.total_rows == 3
        assert table.rows[0] == {
            "post_id": "doc1",
            "post_title": "First Post",
            "comment_user": "Alice",
            "comment_text": "Great!",
            "comment_likes": 3,
        }


@pytest.mark.integration
class TestErrorHandling:
    """Batch validation and error recording"""

    @pytest.mark.parametrize("batch", [[], "not a batch", {"_id": 1}, None])
    def test_invalid_batch(self, batch):
        mapper = TableMapper({"options": {"include_all_fields": True}})
        with pytest.raises(MappingError) as exc_info:
            mapper.map(batch)
        assert exc_info.value.kind is ErrorKind.VALIDATION

    def test_invalid_configuration(self):
        with pytest.raises(MappingError) as exc_info:
            TableMapper({"mapping_type": "array_expand", "field_mappings": _fields(("a", "a"))})
        assert exc_info.value.kind is ErrorKind.CONFIGURATION

    def test_unknown_transform_attributed(self):
        mapper = TableMapper({
            "field_mappings": [
                {"source_field": "name", "target_field": "name", "transform": {"type": "shout"}},
            ],
        })
        with pytest.raises(MappingError) as exc_info:
            mapper.map([{"_id": "x1", "name": "ann"}])
        assert exc_info.value.kind is ErrorKind.TRANSFORMATION
        assert exc_info.value.document_id == "x1"

    def test_non_mapping_item_skipped(self):
        mapper = TableMapper({
            "field_mappings": _fields(("_id", "id")),
            "options": {"skip_invalid_rows": True},
        })
        table = mapper.map([{"_id": 1}, "oops", {"_id": 2}])

        assert table.rows == [{"id": 1}, {"id": 2}]
        assert mapper.get_errors()[0].kind is ErrorKind.VALIDATION

    def test_unexpected_error_wrapped_as_unknown(self):
        mapper = TableMapper({"options": {"include_all_fields": True}})

        with pytest.raises(MappingError) as exc_info:
            mapper.map([ExplodingDocument({"_id": "e1"})])

        error = exc_info.value
        assert error.kind is ErrorKind.UNKNOWN
        assert error.document_id == "e1"
        assert error.recoverable is True
        assert isinstance(error.__cause__, RuntimeError)

    def test_errors_reset_between_runs(self):
        mapper = TableMapper({
            "field_mappings": [{"source_field": "a", "target_field": "a", "required": True}],
            "options": {"skip_invalid_rows": True},
        })
        mapper.map([{"b": 1}, {"a": 1}])
        assert mapper.has_errors()

        mapper.map([{"a": 2}])
        assert not mapper.has_errors()
        assert mapper.get_stats().error_count == 0

    def test_invalid_batch_clears_previous_errors(self):
        mapper = TableMapper({
            "field_mappings": [{"source_field": "a", "target_field": "a", "required": True}],
            "options": {"skip_invalid_rows": True},
        })
        mapper.map([{"b": 1}, {"a": 1}])
        assert mapper.get_stats().skipped_documents == 1

        with pytest.raises(MappingError) as exc_info:
            mapper.map([])
        assert exc_info.value.kind is ErrorKind.VALIDATION
        assert not mapper.has_errors()
        assert mapper.get_stats().error_count == 0
        assert mapper.get_stats().skipped_documents == 0

    def test_errors_counted_in_metrics(self):
        before = REGISTRY.get_sample_value(
            "doctable_mapping_errors_total",
            {"mapping_type": "flatten", "error_kind": "VALIDATION_ERROR"},
        ) or 0.0
        mapper = TableMapper({
            "field_mappings": [{"source_field": "a", "target_field": "a", "required": True}],
            "options": {"skip_invalid_rows": True},
        })
        mapper.map([{"b": 1}, {"b": 2}, {"a": 3}])

        after = REGISTRY.get_sample_value(
            "doctable_mapping_errors_total",
            {"mapping_type": "flatten", "error_kind": "VALIDATION_ERROR"},
        )
        assert after - before == 2


@pytest.mark.integration
class TestPassThroughAndExport:
    """Pass-through mapping, quick API and exporters together"""

    def test_pass_through_columns(self, blog_posts):
        table = quick_map(blog_posts, include_all_fields=True, exclude_fields=["title"])
        columns = {column.name: column for column in table.columns}

        assert "title" not in columns
        assert columns["author.profile.country"].type == "string"
        assert columns["comments[0].likes"].type == "integer"
        assert columns["comments[0].likes"].required is True
        assert columns["comments[1].user"].required is False
        # Scalar arrays stay arrays in pass-through rows
        assert columns["tags"].type == "string"
        assert table.rows[0]["tags"] == ["python", "data"]

    def test_quick_map_with_field_mappings(self):
        table = quick_map(
            [{"_id": 1, "score": "7"}],
            field_mappings=[{"source_field": "score", "target_field": "score", "transform": {"type": "number"}}],
            source_name="scores",
        )
        assert table.rows == [{"score": 7}]
        assert table.metadata.source_name == "scores"

    def test_export_round_trip(self, blog_posts):
        mapper = TableMapper({
            "mapping_type": "array_expand",
            "array_field": "comments",
            "field_mappings": _fields(("_id", "post_id"), ("comments[].user", "user")),
        })
        table = mapper.map(blog_posts)

        assert mapper.export(table, "csv") == "post_id,user\ndoc1,Alice\ndoc1,Bob\ndoc2,Carol"

        payload = json.loads(mapper.export(table, {"format": "json"}))
        assert payload["metadata"]["total_rows"] == 3
        assert payload["data"] == table.rows

        header, *values = json.loads(quick_export(table, "array"))
        assert [dict(zip(header, row)) for row in values] == table.rows

    def test_map_is_deterministic(self, blog_posts):
        config = {"options": {"include_all_fields": True}}
        first = quick_map(blog_posts, include_all_fields=True)
        second = TableMapper(config).map(blog_posts)
        assert first.rows == second.rows
        assert first.columns == second.columns

    def test_input_not_mutated(self, blog_posts):
        snapshot = json.dumps(blog_posts, sort_keys=True)
        quick_map(blog_posts, mapping_type="array_expand", array_field="comments", include_all_fields=True)
        assert json.dumps(blog_posts, sort_keys=True) == snapshot
