"""
Name List Curator for Focus Area Windowing.

Bounds the two name collections reported by the name finder:
- fully-qualified names: dedup by (source, symbol), keep the shortest
- simple names: length filter, keep the longest

The two eviction policies are intentionally different.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from loguru import logger

from ..config import MAX_SIMPLE_NAMES, MAX_USED_FULLY_QUALIFIED_NAMES
from ..schemas import NameOccurrence, SymbolRecord

MIN_SIMPLE_NAME_LENGTH = 2
MAX_SIMPLE_NAME_LENGTH = 128


class NameListCurator:
    """
    Deduplicates and caps simple and fully-qualified name lists.

    Usage:
        curator = NameListCurator()
        simple, simple_truncated = curator.curate_simple_names(used, declared)
        fqns, fqns_truncated = curator.curate_fully_qualified_names(occurrences)
    """

    def __init__(
        self,
        max_simple_names: int = MAX_SIMPLE_NAMES,
        max_fully_qualified_names: int = MAX_USED_FULLY_QUALIFIED_NAMES,
    ):
        self.max_simple_names = max_simple_names
        self.max_fully_qualified_names = max_fully_qualified_names

    def curate_fully_qualified_names(
        self,
        occurrences: Iterable[NameOccurrence],
    ) -> Tuple[List[NameOccurrence], bool]:
        """
        Dedup by exact (source, symbol), first-seen order.

        Over the cap, keeps the entries with the shortest combined
        source + symbol length. Returns ``(names, was_truncated)``.
        """
        deduped: Dict[Tuple[str, str], NameOccurrence] = {}
        for occurrence in occurrences:
            deduped.setdefault((occurrence.source, occurrence.symbol), occurrence)
        names = list(deduped.values())

        if len(names) <= self.max_fully_qualified_names:
            return names, False

        names.sort(key=lambda name: len(name.source) + len(name.symbol))
        logger.debug(
            f"Truncated fully-qualified names from {len(names)} to {self.max_fully_qualified_names}"
        )
        return names[:self.max_fully_qualified_names], True

    def curate_simple_names(
        self,
        used: Sequence[SymbolRecord],
        declared: Sequence[SymbolRecord],
    ) -> Tuple[List[str], bool]:
        """
        Filter used + declared symbols by stripped length (2..128).

        Over the cap, collapses duplicates keeping first-seen order, then keeps
        the longest names; among equal lengths the earliest-seen are evicted.
        Returns ``(names, was_truncated)``.
        """
        names = [
            record.symbol.strip()
            for record in [*used, *declared]
            if MIN_SIMPLE_NAME_LENGTH <= len(record.symbol.strip()) <= MAX_SIMPLE_NAME_LENGTH
        ]

        if len(names) <= self.max_simple_names:
            return names, False

        names = list(dict.fromkeys(names))
        if len(names) > self.max_simple_names:
            names.sort(key=len)
            del names[:len(names) - self.max_simple_names]

        logger.debug(f"Simple names exceeded {self.max_simple_names}; kept {len(names)}")
        return names, True
