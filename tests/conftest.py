"""
Pytest configuration and fixtures for doc-table-mapper tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import pytest

from doctable.core.models import TableData, TableMetadata
from doctable.core.schema import ColumnInferrer


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests for a single component"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that run the full mapping pipeline"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests through the command-line interface"
    )


# =======================
# DOCUMENT FIXTURES
# =======================

@pytest.fixture
def blog_posts() -> list[dict]:
    """Posts with nested authors and comment arrays"""
    return [
        {
            "_id": "doc1",
            "title": "First Post",
            "author": {"name": "Ann", "profile": {"country": "NZ"}},
            "tags": ["python", "data"],
            "comments": [
                {"user": "Alice", "text": "Great!", "likes": 3},
                {"user": "Bob", "text": "Nice!", "likes": 1},
            ],
        },
        {
            "_id": "doc2",
            "title": "Second Post",
            "author": {"name": "Ben", "profile": {"country": "AU"}},
            "tags": [],
            "comments": [
                {"user": "Carol", "text": "Hmm", "likes": 0},
            ],
        },
    ]


# =======================
# TABLE FIXTURES
# =======================

@pytest.fixture
def table_factory():
    """
    Build a TableData from rows with inferred columns

    Returns:
        Callable taking rows and an optional mapping type
    """
    def _make(rows: list[dict], mapping_type: str = "flatten") -> TableData:
        columns = ColumnInferrer().infer_columns(rows)
        return TableData(
            columns=columns,
            rows=rows,
            metadata=TableMetadata(
                total_rows=len(rows),
                total_columns=len(columns),
                mapping_type=mapping_type,
                source_name="test",
            ),
        )

    return _make
