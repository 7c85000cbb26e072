# Focus Area Modules
# Version: 1.0

# Document model
from .document import (
    DocumentLike,
    EditorLike,
    EditorSnapshot,
    Position,
    Range,
    TextDocument,
)

# Configuration
from .config import FocusAreaConfig, load_config

# Pydantic schemas
from .schemas import (
    FocusAreaContext,
    FocusAreaNames,
    FoundNames,
    FullyQualifiedNames,
    FullyQualifiedSymbols,
    NameOccurrence,
    NamesAbsent,
    NamesResult,
    SelectionRange,
    SimpleSymbols,
    SymbolRecord,
)

# Name finder boundary
from .name_finder import (
    LANGUAGE_GRAMMARS,
    NameFinder,
    TreeSitterNameFinder,
    coerce_names_result,
    is_supported_language,
)

# Windowing
from .context_windowing import (
    FocusAreaExtractor,
    NameListCurator,
    RangeBoundAdjuster,
)

__all__ = [
    # Document
    "DocumentLike",
    "EditorLike",
    "EditorSnapshot",
    "Position",
    "Range",
    "TextDocument",
    # Config
    "FocusAreaConfig",
    "load_config",
    # Schemas
    "FocusAreaContext",
    "FocusAreaNames",
    "FoundNames",
    "FullyQualifiedNames",
    "FullyQualifiedSymbols",
    "NameOccurrence",
    "NamesAbsent",
    "NamesResult",
    "SelectionRange",
    "SimpleSymbols",
    "SymbolRecord",
    # Name finder
    "LANGUAGE_GRAMMARS",
    "NameFinder",
    "TreeSitterNameFinder",
    "coerce_names_result",
    "is_supported_language",
    # Windowing
    "FocusAreaExtractor",
    "NameListCurator",
    "RangeBoundAdjuster",
]
