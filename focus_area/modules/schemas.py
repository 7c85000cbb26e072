"""
Focus Area - Core Data Structures (Pydantic Schemas)

Defines the models exchanged with the name finder and handed to downstream
consumers:
- SymbolRecord / NameOccurrence: raw and fully-qualified symbol occurrences
- FoundNames / NamesAbsent: tagged name-finder result
- FocusAreaContext: final extraction output
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# =============================================================================
# NAME FINDER RESULTS
# =============================================================================


class SymbolRecord(_CamelModel):
    """A simple (unqualified) symbol occurrence."""

    symbol: str


class NameOccurrence(_CamelModel):
    """A fully-qualified reference: ``symbol`` exported by ``source``."""

    source: str
    symbol: str


class SimpleSymbols(_CamelModel):
    used_symbols: List[SymbolRecord] = Field(default_factory=list)
    declared_symbols: List[SymbolRecord] = Field(default_factory=list)


class FullyQualifiedSymbols(_CamelModel):
    used_symbols: List[NameOccurrence] = Field(default_factory=list)


class FoundNames(_CamelModel):
    kind: Literal["found"] = "found"
    simple: SimpleSymbols = Field(default_factory=SimpleSymbols)
    fully_qualified: FullyQualifiedSymbols = Field(default_factory=FullyQualifiedSymbols)


class NamesAbsent(_CamelModel):
    """No names could be discovered (unsupported language, finder failure)."""

    kind: Literal["absent"] = "absent"
    reason: str = ""


NamesResult = Union[FoundNames, NamesAbsent]


# =============================================================================
# OUTPUT
# =============================================================================


class SelectionRange(_CamelModel):
    start_line: int
    start_character: int
    end_line: int
    end_character: int


class FullyQualifiedNames(_CamelModel):
    used: List[NameOccurrence] = Field(default_factory=list)


class FocusAreaNames(_CamelModel):
    simple_names: List[str] = Field(default_factory=list)
    fully_qualified_names: FullyQualifiedNames = Field(default_factory=FullyQualifiedNames)


class FocusAreaContext(_CamelModel):
    """The bounded focus area handed to the downstream prompt builder."""

    code_block: str
    extended_code_block: str
    selection_inside_extended_code_block: Optional[SelectionRange] = None
    names: FocusAreaNames = Field(default_factory=FocusAreaNames)

    def to_payload(self) -> Dict[str, Any]:
        """camelCase, JSON-ready dict; the remapped selection is omitted when absent."""
        return self.model_dump(by_alias=True, exclude_none=True)
