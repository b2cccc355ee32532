"""Fold-to-definitions selection core.

Pure functions deciding which document lines collapse so that only
definitions stay visible. No I/O and no shared state.
"""

from __future__ import annotations

from .config import (
    DEFAULT_CONFIG,
    FoldClassAndInterface,
    FoldConfig,
    config_from_mapping,
    config_to_mapping,
)
from .lines import NOTHING_TO_FOLD, FoldPlan, compute_fold_lines
from .ranges import select_folding_ranges
from .selector import is_foldable, select_foldable
from .types import FoldingRange, FoldingRangeKind, Position, Range, Symbol, SymbolKind

__all__ = [
    "DEFAULT_CONFIG",
    "FoldClassAndInterface",
    "FoldConfig",
    "FoldPlan",
    "FoldingRange",
    "FoldingRangeKind",
    "NOTHING_TO_FOLD",
    "Position",
    "Range",
    "Symbol",
    "SymbolKind",
    "compute_fold_lines",
    "config_from_mapping",
    "config_to_mapping",
    "is_foldable",
    "select_foldable",
    "select_folding_ranges",
]
