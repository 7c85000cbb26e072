"""
Line/character addressing over an in-memory document.

The extractor only talks to documents and editors through the
``DocumentLike`` / ``EditorLike`` protocols below. ``TextDocument`` and
``EditorSnapshot`` are plain implementations used by the CLI and tests, and
by any caller that already holds the text as a string.

Positions are zero-based. Line breaks are ``\\n``, ``\\r\\n`` or ``\\r``;
``line_end`` never counts the break itself.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Tuple

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, order=True)
class Position:
    line: int
    character: int

    def __post_init__(self) -> None:
        if self.line < 0 or self.character < 0:
            raise ValueError(f"Position must be non-negative, got ({self.line}, {self.character})")


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"Range end {self.end} precedes start {self.start}")

    @classmethod
    def from_coords(cls, start_line: int, start_character: int, end_line: int, end_character: int) -> "Range":
        return cls(Position(start_line, start_character), Position(end_line, end_character))

    @property
    def is_empty(self) -> bool:
        """True for a pure cursor (no selection)."""
        return self.start == self.end

    @property
    def line_span(self) -> int:
        return self.end.line - self.start.line + 1


class DocumentLike(Protocol):
    @property
    def text(self) -> str: ...

    @property
    def language_id(self) -> str: ...

    @property
    def line_count(self) -> int: ...

    def line_end(self, line: int) -> int: ...

    def get_text(self, rng: Range) -> str: ...


class EditorLike(Protocol):
    @property
    def document(self) -> Optional[DocumentLike]: ...

    @property
    def selection(self) -> Range: ...

    @property
    def visible_ranges(self) -> Sequence[Range]: ...


class TextDocument:
    """
    Immutable snapshot of a document's text.

    Usage:
        doc = TextDocument("a = 1\\nb = 2\\n", language_id="python")
        doc.get_text(Range.from_coords(0, 0, 1, 5))  # "a = 1\\nb = 2"
    """

    def __init__(self, text: str, language_id: str = "plaintext"):
        self._text = text
        self._language_id = language_id
        # (start offset, content length) per line
        self._lines: List[Tuple[int, int]] = []

        offset = 0
        for match in _LINE_BREAK_RE.finditer(text):
            self._lines.append((offset, match.start() - offset))
            offset = match.end()
        self._lines.append((offset, len(text) - offset))

    @property
    def text(self) -> str:
        return self._text

    @property
    def language_id(self) -> str:
        return self._language_id

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def last_line(self) -> int:
        return len(self._lines) - 1

    def line_end(self, line: int) -> int:
        """Character offset of the end of ``line`` (its length without the line break)."""
        if not 0 <= line < len(self._lines):
            raise IndexError(f"Line {line} out of range [0, {len(self._lines)})")
        return self._lines[line][1]

    def line_text(self, line: int) -> str:
        start, length = self._lines[line]
        return self._text[start:start + length]

    def offset_at(self, position: Position) -> int:
        """Absolute offset of ``position``, clamped to the document like an editor would."""
        if position.line >= len(self._lines):
            return len(self._text)
        start, length = self._lines[position.line]
        return start + min(position.character, length)

    def full_range(self) -> Range:
        return Range.from_coords(0, 0, self.last_line, self.line_end(self.last_line))

    def get_text(self, rng: Range) -> str:
        return self._text[self.offset_at(rng.start):self.offset_at(rng.end)]


@dataclass(frozen=True)
class EditorSnapshot:
    """Editor state captured at call time: open document, selection and viewport."""
    document: Optional[TextDocument]
    selection: Range = field(default_factory=lambda: Range.from_coords(0, 0, 0, 0))
    visible_ranges: Tuple[Range, ...] = ()

    @classmethod
    def with_viewport(
        cls,
        document: TextDocument,
        selection: Range,
        viewport_lines: int = 40,
    ) -> "EditorSnapshot":
        """
        Build a snapshot whose single visible range is a window of
        ``viewport_lines`` lines centred on the selection start.
        """
        half = max(viewport_lines, 1) // 2
        first = max(0, selection.start.line - half)
        last = min(document.last_line, first + max(viewport_lines, 1) - 1)
        visible = Range.from_coords(first, 0, last, document.line_end(last))
        return cls(document=document, selection=selection, visible_ranges=(visible,))
