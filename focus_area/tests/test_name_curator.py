"""
Tests for NameListCurator: dedup, length filter and the two eviction policies.
"""

from focus_area.modules.context_windowing import NameListCurator
from focus_area.modules.schemas import NameOccurrence, SymbolRecord


def fqn(source: str, symbol: str) -> NameOccurrence:
    return NameOccurrence(source=source, symbol=symbol)


def records(*symbols: str):
    return [SymbolRecord(symbol=s) for s in symbols]


class TestFullyQualifiedNames:
    """Tests for fully-qualified name curation (shortest kept)."""

    def test_dedup_keeps_first_seen_order(self):
        curator = NameListCurator()
        names, truncated = curator.curate_fully_qualified_names([
            fqn("os", "path"),
            fqn("typing", "List"),
            fqn("os", "path"),
            fqn("json", "dumps"),
        ])

        assert names == [fqn("os", "path"), fqn("typing", "List"), fqn("json", "dumps")]
        assert truncated is False

    def test_same_symbol_from_different_sources_is_kept(self):
        curator = NameListCurator()
        names, _ = curator.curate_fully_qualified_names([fqn("a", "x"), fqn("b", "x")])

        assert len(names) == 2

    def test_at_cap_is_unchanged(self):
        curator = NameListCurator()
        occurrences = [fqn("mod", "s" * i) for i in range(25, 0, -1)]

        names, truncated = curator.curate_fully_qualified_names(occurrences)

        assert names == occurrences
        assert truncated is False

    def test_over_cap_keeps_shortest(self):
        curator = NameListCurator()
        # combined lengths 2..31, fed longest first
        occurrences = [fqn("m", "s" * i) for i in range(30, 0, -1)]

        names, truncated = curator.curate_fully_qualified_names(occurrences)

        assert truncated is True
        assert len(names) == 25
        assert [len(n.source) + len(n.symbol) for n in names] == list(range(2, 27))

    def test_duplicates_collapsing_under_cap_are_not_truncated(self):
        curator = NameListCurator()
        occurrences = [fqn("pkg", f"name{i}") for i in range(20)] * 2

        names, truncated = curator.curate_fully_qualified_names(occurrences)

        assert names == occurrences[:20]
        assert truncated is False

    def test_ties_keep_first_seen_order(self):
        curator = NameListCurator()
        occurrences = [fqn("pkg", f"n{i:02d}") for i in range(26)]

        names, truncated = curator.curate_fully_qualified_names(occurrences)

        assert names == occurrences[:25]
        assert truncated is True

    def test_custom_cap(self):
        curator = NameListCurator(max_fully_qualified_names=2)
        names, truncated = curator.curate_fully_qualified_names([
            fqn("long.module", "Symbol"),
            fqn("a", "b"),
            fqn("ab", "c"),
        ])

        assert names == [fqn("a", "b"), fqn("ab", "c")]
        assert truncated is True


class TestSimpleNames:
    """Tests for simple name curation (longest kept)."""

    def test_used_then_declared_order(self):
        curator = NameListCurator()
        names, truncated = curator.curate_simple_names(records("foo", "bar"), records("baz"))

        assert names == ["foo", "bar", "baz"]
        assert truncated is False

    def test_length_filter_on_stripped_text(self):
        curator = NameListCurator()
        names, _ = curator.curate_simple_names(
            records(" a ", "ab", "  padded  ", "x" * 128, "y" * 129, ""),
            [],
        )

        assert names == ["ab", "padded", "x" * 128]

    def test_duplicates_kept_under_cap(self):
        curator = NameListCurator()
        names, truncated = curator.curate_simple_names(records("self", "self"), records("self"))

        assert names == ["self", "self", "self"]
        assert truncated is False

    def test_over_cap_keeps_longest(self):
        curator = NameListCurator()
        # 120 unique names with lengths 2..121
        symbols = ["n" * length for length in range(2, 122)]

        names, truncated = curator.curate_simple_names(records(*symbols), [])

        assert truncated is True
        assert len(names) == 100
        assert sorted(names, key=len) == ["n" * length for length in range(22, 122)]

    def test_over_cap_with_few_unique_collapses_duplicates(self):
        curator = NameListCurator()
        unique = [f"name_{i}" for i in range(50)]

        names, truncated = curator.curate_simple_names(records(*unique), records(*unique, *unique))

        assert truncated is True
        assert names == unique

    def test_equal_lengths_evict_earliest_seen(self):
        curator = NameListCurator()
        symbols = [f"n{i:05d}" for i in range(150)]

        names, truncated = curator.curate_simple_names(records(*symbols[:90]), records(*symbols[90:]))

        assert truncated is True
        assert names == symbols[50:]

    def test_filtered_entries_do_not_count_toward_cap(self):
        curator = NameListCurator(max_simple_names=3)
        names, truncated = curator.curate_simple_names(records("a", "b", "c", "dd", "ee"), records("ff"))

        assert names == ["dd", "ee", "ff"]
        assert truncated is False

    def test_custom_cap(self):
        curator = NameListCurator(max_simple_names=2)
        names, truncated = curator.curate_simple_names(records("abc", "abcdef", "abcd"), [])

        assert sorted(names, key=len) == ["abcd", "abcdef"]
        assert truncated is True
