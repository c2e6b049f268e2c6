from __future__ import annotations

from pathlib import Path

import pytest

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture
def testdata() -> Path:
    """Directory holding sample documents."""
    return TESTDATA


@pytest.fixture
def table_doc():
    """Nested document used by the table tests."""
    return {
        "string": {"key": "a string"},
        "float": {"nested": {"key": 1.23}},
        "strings": {"nested": {"key": ["one", "two", "three"]}},
        "skipped": {"more": {"new": {"key": "skipped"}}},
    }
