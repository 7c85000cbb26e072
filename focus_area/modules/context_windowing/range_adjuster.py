"""
Range Bound Adjuster for Focus Area Windowing.

Fits a range of interest to the character budget using whole-line edits:
- trim() drops lines from the end until the text fits
- expand() grows the range one line at a time, alternating up and down,
  until the text reaches the budget

Line granularity may over- or undershoot the budget by up to one line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from loguru import logger

from ..config import FOCUS_AREA_CHAR_LIMIT
from ..document import DocumentLike, Position, Range


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class ExpansionState:
    """Which side the next expansion step prefers."""
    prefer_upward: bool = True

    def advance(self, can_extend_up: bool, can_extend_down: bool) -> Tuple[Optional[Direction], "ExpansionState"]:
        """
        Pick the next direction and the state for the step after it.

        Returns ``(None, self)`` when the range cannot grow on either side.
        """
        if self.prefer_upward and can_extend_up:
            return Direction.UP, ExpansionState(prefer_upward=False)
        if can_extend_down:
            return Direction.DOWN, ExpansionState(prefer_upward=True)
        # Bottom of the document reached: keep growing upward only
        if can_extend_up:
            return Direction.UP, ExpansionState(prefer_upward=False)
        return None, self


class RangeBoundAdjuster:
    """
    Trims and expands ranges against a character budget.

    Usage:
        adjuster = RangeBoundAdjuster(char_limit=200)
        trimmed = adjuster.trim(document, selection)
        extended = adjuster.expand(document, trimmed)
    """

    def __init__(self, char_limit: int = FOCUS_AREA_CHAR_LIMIT):
        self.char_limit = char_limit

    def trim(self, document: DocumentLike, rng: Range) -> Range:
        """
        Move the end of ``rng`` up one line at a time until its text fits.

        The start never moves. A range that cannot shrink further (collapsed,
        or confined to its start line) is returned as-is, even if oversized.
        """
        while len(document.get_text(rng)) > self.char_limit and not rng.is_empty:
            if rng.end.line == 0:
                break

            previous_line = rng.end.line - 1
            if previous_line < rng.start.line:
                # Dropping the end line would cross the start
                break

            rng = Range(rng.start, Position(previous_line, document.line_end(previous_line)))

        return rng

    def expand(self, document: DocumentLike, rng: Range) -> Range:
        """
        Grow ``rng`` by whole lines until its text reaches the budget or it
        covers the first through the last line of the document.
        """
        last_line = document.line_count - 1
        state = ExpansionState()
        steps = 0

        while len(document.get_text(rng)) < self.char_limit:
            direction, state = state.advance(
                can_extend_up=rng.start.line > 0,
                can_extend_down=rng.end.line < last_line,
            )
            if direction is None:
                break

            if direction is Direction.UP:
                rng = Range(Position(rng.start.line - 1, 0), rng.end)
            else:
                next_line = rng.end.line + 1
                rng = Range(rng.start, Position(next_line, document.line_end(next_line)))
            steps += 1

        logger.debug(f"Expanded range to lines {rng.start.line}-{rng.end.line} in {steps} steps")
        return rng
