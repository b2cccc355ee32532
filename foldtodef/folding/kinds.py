"""Symbol-kind groupings driving fold selection."""

from __future__ import annotations

from .types import SymbolKind

CLASS_AND_INTERFACE_SYMBOL_KINDS = frozenset({SymbolKind.CLASS, SymbolKind.INTERFACE})
FUNCTION_SYMBOL_KINDS = frozenset({SymbolKind.METHOD, SymbolKind.FUNCTION})
TARGET_SYMBOL_KINDS = (
    CLASS_AND_INTERFACE_SYMBOL_KINDS
    | FUNCTION_SYMBOL_KINDS
    | {SymbolKind.PROPERTY, SymbolKind.CONSTRUCTOR, SymbolKind.OPERATOR}
)
