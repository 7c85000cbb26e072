# Pytest configuration for the Focus Area test suite
#
# Timeout strategy:
# - FAST tests: 5s (pure range/list computation)
# - MEDIUM tests: 20s (Tree-sitter parsing, CLI with file I/O)

from __future__ import annotations

from typing import List, Optional

import pytest

from focus_area.modules.document import Range
from focus_area.modules.schemas import NamesResult

# ---------------------------------------------------------------------------
# Timeout configuration by test file
# ---------------------------------------------------------------------------
# Maps test file patterns to timeout values (seconds)
# More specific patterns should come first

TIMEOUT_MAP = {
    # MEDIUM tests (20s) - parser grammars, subprocess-free CLI runs
    "test_name_finder": 20,
    "test_cli": 20,
    "test_focus_area_extractor": 20,

    # FAST tests (5s) - Pure unit tests
    "test_range_adjuster": 5,
    "test_name_curator": 5,
    "test_document": 5,
    "test_config": 5,
}


def pytest_collection_modifyitems(config, items):
    """Apply timeout markers based on test file names."""
    for item in items:
        test_name = item.path.stem

        # Find matching timeout
        timeout = 10  # default
        for pattern, t in TIMEOUT_MAP.items():
            if pattern in test_name:
                timeout = t
                break

        # Apply timeout marker if not already set
        if item.get_closest_marker("timeout") is None:
            item.add_marker(pytest.mark.timeout(timeout))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


class RecordingNameFinder:
    """Returns a canned result and records every call."""

    def __init__(self, result: Optional[NamesResult] = None, error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.calls: List[tuple] = []

    async def find_names(self, text: str, extent: Range, language_id: str):
        self.calls.append((text, extent, language_id))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def recording_finder():
    return RecordingNameFinder


@pytest.fixture(autouse=True)
def clear_focus_area_env(monkeypatch):
    """Keep FOCUS_AREA_* overrides from the developer's shell out of tests."""
    for name in (
        "FOCUS_AREA_CHAR_LIMIT",
        "FOCUS_AREA_MAX_SIMPLE_NAMES",
        "FOCUS_AREA_MAX_FQNS",
        "FOCUS_AREA_FINDER_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
