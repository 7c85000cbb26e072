"""
Focus Area Extractor.

High-level API: turns the current editor state into a FocusAreaContext by
combining the name finder, NameListCurator and RangeBoundAdjuster.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from loguru import logger

from ..config import FocusAreaConfig
from ..document import DocumentLike, EditorLike, Range
from ..name_finder import NameFinder, TreeSitterNameFinder, coerce_names_result
from ..schemas import (
    FocusAreaContext,
    FocusAreaNames,
    FoundNames,
    FullyQualifiedNames,
    NamesAbsent,
    NamesResult,
    SelectionRange,
)
from .name_curator import NameListCurator
from .range_adjuster import RangeBoundAdjuster


class FocusAreaExtractor:
    """
    Builds the bounded focus area around the cursor or selection.

    Usage:
        extractor = FocusAreaExtractor(config=load_config())
        context = await extractor.extract(editor)
        if context is not None:
            payload = context.to_payload()
    """

    def __init__(
        self,
        name_finder: Optional[NameFinder] = None,
        config: Optional[FocusAreaConfig] = None,
    ):
        self.config = config or FocusAreaConfig()
        self.name_finder = name_finder if name_finder is not None else TreeSitterNameFinder()
        self.adjuster = RangeBoundAdjuster(char_limit=self.config.focus_area_char_limit)
        self.curator = NameListCurator(
            max_simple_names=self.config.max_simple_names,
            max_fully_qualified_names=self.config.max_fully_qualified_names,
        )

    async def extract(self, editor: EditorLike) -> Optional[FocusAreaContext]:
        """
        Extract the focus area for ``editor``.

        Returns None when the editor has no open document.
        """
        document = editor.document
        if document is None:
            logger.debug("No open document; no focus area available")
            return None

        selection = editor.selection
        important_range = self._range_of_interest(editor)

        names = await self._find_names(document, important_range)
        if isinstance(names, FoundNames):
            simple_names, _ = self.curator.curate_simple_names(
                names.simple.used_symbols,
                names.simple.declared_symbols,
            )
            used_fqns, _ = self.curator.curate_fully_qualified_names(names.fully_qualified.used_symbols)
        else:
            simple_names, used_fqns = [], []

        trimmed_range = self.adjuster.trim(document, important_range)
        code_block = document.get_text(trimmed_range)
        extended_range = self.adjuster.expand(document, trimmed_range)

        if not simple_names and not used_fqns:
            simple_names = [code_block]

        return FocusAreaContext(
            code_block=code_block,
            extended_code_block=document.get_text(extended_range),
            selection_inside_extended_code_block=self._selection_inside_extended_block(selection, extended_range),
            names=FocusAreaNames(
                simple_names=simple_names,
                fully_qualified_names=FullyQualifiedNames(used=used_fqns),
            ),
        )

    def _range_of_interest(self, editor: EditorLike) -> Range:
        selection = editor.selection
        if not selection.is_empty:
            return selection

        # Cursor only: fall back to what the user can see
        visible = list(editor.visible_ranges)
        if visible:
            return visible[0]
        return selection

    async def _find_names(self, document: DocumentLike, extent: Range) -> NamesResult:
        language_id = document.language_id
        timeout = self.config.name_finder_timeout_seconds
        try:
            call = self.name_finder.find_names(document.text, extent, language_id)
            if timeout is not None:
                raw = await asyncio.wait_for(call, timeout=timeout)
            else:
                raw = await call
            return coerce_names_result(raw)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"Name finder failed for '{language_id}': {type(e).__name__}: {e}")
            return NamesAbsent(reason=f"error:{type(e).__name__}")

    @staticmethod
    def _selection_inside_extended_block(selection: Range, extended_range: Range) -> Optional[SelectionRange]:
        if selection.is_empty:
            return None

        offset = extended_range.start.line
        return SelectionRange(
            start_line=selection.start.line - offset,
            start_character=selection.start.character,
            end_line=selection.end.line - offset,
            end_character=selection.end.character,
        )
