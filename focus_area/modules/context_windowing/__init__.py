"""
Context Windowing Package for Focus Area Extraction.

This package bounds the code context around a cursor or selection before it
is sent to a code-understanding assistant.

Components:
- RangeBoundAdjuster: Trims and expands ranges by whole lines to the char budget
- NameListCurator: Deduplicates and caps simple and fully-qualified names
- FocusAreaExtractor: High-level API combining all components
"""

from .range_adjuster import (
    RangeBoundAdjuster,
    ExpansionState,
    Direction,
)

from .name_curator import (
    NameListCurator,
    MIN_SIMPLE_NAME_LENGTH,
    MAX_SIMPLE_NAME_LENGTH,
)

from .focus_area_extractor import (
    FocusAreaExtractor,
)

__all__ = [
    # Range Adjustment
    "RangeBoundAdjuster",
    "ExpansionState",
    "Direction",
    # Name Curation
    "NameListCurator",
    "MIN_SIMPLE_NAME_LENGTH",
    "MAX_SIMPLE_NAME_LENGTH",
    # High-level API
    "FocusAreaExtractor",
]
