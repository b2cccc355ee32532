"""Symbol selection: which outline nodes collapse to their header line.

Walks the whole symbol tree depth-first, carrying the kinds of every ancestor
on the path. Some outline providers (Omnisharp among them) flatten nested
classes into top-level siblings, so inner classes are also recognized by a
top-level class/interface whose range strictly contains them.
"""

from __future__ import annotations

from collections.abc import Sequence

from .config import FoldClassAndInterface, FoldConfig
from .kinds import CLASS_AND_INTERFACE_SYMBOL_KINDS, FUNCTION_SYMBOL_KINDS, TARGET_SYMBOL_KINDS
from .types import Symbol


def _has_containing_top_level_class(symbol: Symbol, top_level_symbols: Sequence[Symbol]) -> bool:
    return any(
        candidate.kind in CLASS_AND_INTERFACE_SYMBOL_KINDS and candidate.range.strictly_contains(symbol.range)
        for candidate in top_level_symbols
    )


def is_foldable(
    symbol: Symbol,
    ancestor_kinds: frozenset[int],
    top_level_symbols: Sequence[Symbol],
    config: FoldConfig,
) -> bool:
    """Return whether ``symbol`` should be folded.

    ``ancestor_kinds`` holds the kinds on the path from the root down to, but
    excluding, ``symbol``. ``top_level_symbols`` is the unmodified root list of
    the outline.
    """
    if symbol.range.is_single_line:
        return False

    if symbol.kind not in TARGET_SYMBOL_KINDS:
        return False

    is_local_function = symbol.kind in FUNCTION_SYMBOL_KINDS and not FUNCTION_SYMBOL_KINDS.isdisjoint(ancestor_kinds)
    is_class_like = symbol.kind in CLASS_AND_INTERFACE_SYMBOL_KINDS
    mode = config.fold_class_and_interface

    is_inner_class_like = (
        mode is FoldClassAndInterface.INNER_CLASS_ONLY
        and is_class_like
        and (
            not CLASS_AND_INTERFACE_SYMBOL_KINDS.isdisjoint(ancestor_kinds)
            or _has_containing_top_level_class(symbol, top_level_symbols)
        )
    )

    if is_local_function and not config.fold_local_function:
        return False
    if is_class_like and not is_inner_class_like and mode is not FoldClassAndInterface.ALL:
        return False
    if is_inner_class_like and mode not in {FoldClassAndInterface.ALL, FoldClassAndInterface.INNER_CLASS_ONLY}:
        return False
    return True


def select_foldable(top_level_symbols: Sequence[Symbol], config: FoldConfig) -> list[Symbol]:
    """Collect foldable symbols in pre-order across the whole outline."""
    selected: list[Symbol] = []

    def walk(symbols: Sequence[Symbol], ancestor_kinds: frozenset[int]) -> None:
        for symbol in symbols:
            if is_foldable(symbol, ancestor_kinds, top_level_symbols, config):
                selected.append(symbol)
            if symbol.children:
                walk(symbol.children, ancestor_kinds | {symbol.kind})

    walk(top_level_symbols, frozenset())
    return selected
