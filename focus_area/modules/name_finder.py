"""Name finder boundary and the default Tree-sitter backed finder.

A name finder reports, for a span of a document, the simple symbols used and
declared inside it and the fully-qualified (module, symbol) references it makes
through the file's imports. Third-party finders plug in through the
``NameFinder`` protocol; their raw payloads are validated by
``coerce_names_result``.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional, Protocol, Tuple

from loguru import logger
from tree_sitter_language_pack import get_parser

from .document import Range, TextDocument
from .schemas import (
    FoundNames,
    FullyQualifiedSymbols,
    NameOccurrence,
    NamesAbsent,
    NamesResult,
    SimpleSymbols,
    SymbolRecord,
)

# Editor language id -> Tree-sitter grammar
LANGUAGE_GRAMMARS: Dict[str, str] = {
    "java": "java",
    "javascript": "tsx",
    "javascriptreact": "tsx",
    "typescriptreact": "tsx",
    "python": "python",
    "typescript": "typescript",
}

IDENTIFIER_TYPES: FrozenSet[str] = frozenset({
    "identifier",
    "type_identifier",
    "property_identifier",
    "shorthand_property_identifier",
})

IMPORT_STATEMENT_TYPES: FrozenSet[str] = frozenset({
    "import_statement",
    "import_from_statement",
    "future_import_statement",
    "import_declaration",
})

# Declaring node type -> field holding the declared name
DECLARATION_FIELDS: Dict[str, str] = {
    # python
    "function_definition": "name",
    "class_definition": "name",
    "assignment": "left",
    "default_parameter": "name",
    "typed_default_parameter": "name",
    # java
    "method_declaration": "name",
    "constructor_declaration": "name",
    "class_declaration": "name",
    "interface_declaration": "name",
    "enum_declaration": "name",
    "formal_parameter": "name",
    "variable_declarator": "name",
    # typescript / tsx
    "function_declaration": "name",
    "generator_function_declaration": "name",
    "method_definition": "name",
    "type_alias_declaration": "name",
    "required_parameter": "pattern",
    "optional_parameter": "pattern",
}

# Nodes whose direct identifier children are declarations
PARAMETER_CONTAINERS: FrozenSet[str] = frozenset({
    "parameters",
    "lambda_parameters",
    "typed_parameter",
})

# Member access node type -> (object field, member field)
MEMBER_ACCESS_FIELDS: Dict[str, Tuple[str, str]] = {
    "attribute": ("object", "attribute"),
    "member_expression": ("object", "property"),
    "field_access": ("object", "field"),
    "method_invocation": ("object", "name"),
}


class NameFinder(Protocol):
    async def find_names(self, text: str, extent: Range, language_id: str) -> NamesResult: ...


def resolve_grammar(language_id: str) -> Optional[str]:
    return LANGUAGE_GRAMMARS.get(language_id)


def is_supported_language(language_id: str) -> bool:
    return language_id in LANGUAGE_GRAMMARS


def coerce_names_result(raw: Any) -> NamesResult:
    """Validate a finder payload (model, camelCase dict or None) into a tagged result."""
    if raw is None:
        return NamesAbsent(reason="no_result")
    if isinstance(raw, (FoundNames, NamesAbsent)):
        return raw
    if isinstance(raw, dict):
        if raw.get("kind") == "absent":
            return NamesAbsent.model_validate(raw)
        return FoundNames.model_validate(raw)
    raise TypeError(f"Unexpected name finder result: {type(raw).__name__}")


@dataclass(frozen=True)
class ImportBinding:
    """A local name bound by an import. ``name`` is None for a whole-module binding."""
    module: str
    name: Optional[str] = None


def _node_text(source_bytes: bytes, node) -> str:
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _strip_quotes(s: str) -> str:
    s = (s or "").strip()
    if len(s) >= 2 and s[0] == s[-1] and s[0] in {"\"", "'", "`"}:
        return s[1:-1]
    return s


def _same_node(a, b) -> bool:
    return b is not None and a.start_byte == b.start_byte and a.end_byte == b.end_byte


def _walk(root):
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


class TreeSitterNameFinder:
    """
    Finds names with Tree-sitter grammars from tree-sitter-language-pack.

    Usage:
        finder = TreeSitterNameFinder()
        names = await finder.find_names(source, Range.from_coords(3, 0, 9, 0), "python")
    """

    async def find_names(self, text: str, extent: Range, language_id: str) -> NamesResult:
        grammar = resolve_grammar(language_id)
        if grammar is None:
            return NamesAbsent(reason=f"unsupported_language:{language_id}")
        return await asyncio.to_thread(self.find_names_sync, text, extent, grammar)

    def find_names_sync(self, text: str, extent: Range, grammar: str) -> FoundNames:
        source_bytes = text.encode("utf-8")
        tree = get_parser(grammar).parse(source_bytes)

        document = TextDocument(text)
        start_byte = len(text[:document.offset_at(extent.start)].encode("utf-8"))
        end_byte = len(text[:document.offset_at(extent.end)].encode("utf-8"))

        bindings, import_spans = self._collect_imports(tree.root_node, source_bytes, grammar)

        used: List[SymbolRecord] = []
        declared: List[SymbolRecord] = []
        qualified: List[NameOccurrence] = []

        for node in _walk(tree.root_node):
            if node.type not in IDENTIFIER_TYPES:
                continue
            if node.start_byte < start_byte or node.end_byte > end_byte:
                continue
            if any(s <= node.start_byte and node.end_byte <= e for s, e in import_spans):
                continue

            name = _node_text(source_bytes, node)
            if self._is_declaration(node):
                declared.append(SymbolRecord(symbol=name))
                continue

            used.append(SymbolRecord(symbol=name))
            occurrence = self._qualify(node, name, bindings, source_bytes)
            if occurrence is not None:
                qualified.append(occurrence)

        logger.debug(
            f"[{grammar}] found {len(used)} used, {len(declared)} declared, {len(qualified)} qualified names"
        )
        return FoundNames(
            simple=SimpleSymbols(used_symbols=used, declared_symbols=declared),
            fully_qualified=FullyQualifiedSymbols(used_symbols=qualified),
        )

    def _is_declaration(self, node) -> bool:
        parent = node.parent
        if parent is None:
            return False
        if parent.type in PARAMETER_CONTAINERS:
            return True
        field_name = DECLARATION_FIELDS.get(parent.type)
        return field_name is not None and _same_node(node, parent.child_by_field_name(field_name))

    def _qualify(
        self,
        node,
        name: str,
        bindings: Dict[str, ImportBinding],
        source_bytes: bytes,
    ) -> Optional[NameOccurrence]:
        binding = bindings.get(name)
        if binding is None:
            return None
        if binding.name is not None:
            return NameOccurrence(source=binding.module, symbol=binding.name)

        # Whole-module binding: only `module.member` resolves to a symbol
        parent = node.parent
        fields = MEMBER_ACCESS_FIELDS.get(parent.type) if parent is not None else None
        if fields is None:
            return None
        object_field, member_field = fields
        if not _same_node(node, parent.child_by_field_name(object_field)):
            return None
        member = parent.child_by_field_name(member_field)
        if member is None:
            return None
        return NameOccurrence(source=binding.module, symbol=_node_text(source_bytes, member))

    def _collect_imports(
        self,
        root,
        source_bytes: bytes,
        grammar: str,
    ) -> Tuple[Dict[str, ImportBinding], List[Tuple[int, int]]]:
        bindings: Dict[str, ImportBinding] = {}
        spans: List[Tuple[int, int]] = []

        for node in _walk(root):
            if node.type not in IMPORT_STATEMENT_TYPES:
                continue
            spans.append((node.start_byte, node.end_byte))

            if grammar == "python":
                self._python_import(node, source_bytes, bindings)
            elif grammar == "java":
                self._java_import(node, source_bytes, bindings)
            else:
                self._js_import(node, source_bytes, bindings)

        return bindings, spans

    def _python_import(self, node, source_bytes: bytes, bindings: Dict[str, ImportBinding]) -> None:
        if node.type == "import_statement":
            for child in node.children_by_field_name("name"):
                if child.type == "aliased_import":
                    module = _node_text(source_bytes, child.child_by_field_name("name"))
                    alias = _node_text(source_bytes, child.child_by_field_name("alias"))
                    bindings[alias] = ImportBinding(module=module)
                else:
                    module = _node_text(source_bytes, child)
                    head = module.split(".")[0]
                    bindings[head] = ImportBinding(module=head)
        elif node.type == "import_from_statement":
            module_node = node.child_by_field_name("module_name")
            if module_node is None:
                return
            module = _node_text(source_bytes, module_node)
            for child in node.children_by_field_name("name"):
                if child.type == "aliased_import":
                    name = _node_text(source_bytes, child.child_by_field_name("name"))
                    alias = _node_text(source_bytes, child.child_by_field_name("alias"))
                    bindings[alias] = ImportBinding(module=module, name=name)
                else:
                    name = _node_text(source_bytes, child)
                    bindings[name] = ImportBinding(module=module, name=name)

    def _java_import(self, node, source_bytes: bytes, bindings: Dict[str, ImportBinding]) -> None:
        if any(child.type == "asterisk" for child in node.children):
            return
        for child in node.named_children:
            if child.type in {"scoped_identifier", "identifier"}:
                qualified = _node_text(source_bytes, child)
                if "." not in qualified:
                    return
                module, name = qualified.rsplit(".", 1)
                bindings[name] = ImportBinding(module=module, name=name)
                return

    def _js_import(self, node, source_bytes: bytes, bindings: Dict[str, ImportBinding]) -> None:
        source_node = node.child_by_field_name("source")
        if source_node is None:
            return
        module = _strip_quotes(_node_text(source_bytes, source_node))

        for clause in node.named_children:
            if clause.type != "import_clause":
                continue
            for child in clause.named_children:
                if child.type == "identifier":
                    bindings[_node_text(source_bytes, child)] = ImportBinding(module=module, name="default")
                elif child.type == "namespace_import":
                    for ident in child.named_children:
                        if ident.type == "identifier":
                            bindings[_node_text(source_bytes, ident)] = ImportBinding(module=module)
                elif child.type == "named_imports":
                    for specifier in child.named_children:
                        if specifier.type != "import_specifier":
                            continue
                        name_node = specifier.child_by_field_name("name")
                        alias_node = specifier.child_by_field_name("alias")
                        if name_node is None:
                            continue
                        name = _node_text(source_bytes, name_node)
                        local = _node_text(source_bytes, alias_node) if alias_node is not None else name
                        bindings[local] = ImportBinding(module=module, name=name)
