"""Structural folding-range filter keyed by range kind."""

from __future__ import annotations

from collections.abc import Sequence

from .config import FoldConfig
from .types import FoldingRange, FoldingRangeKind


def _enabled_kinds(config: FoldConfig) -> frozenset[FoldingRangeKind]:
    enabled: set[FoldingRangeKind] = set()
    if config.fold_comment:
        enabled.add(FoldingRangeKind.COMMENT)
    if config.fold_import:
        enabled.add(FoldingRangeKind.IMPORTS)
    if config.fold_region:
        enabled.add(FoldingRangeKind.REGION)
    return frozenset(enabled)


def select_folding_ranges(ranges: Sequence[FoldingRange], config: FoldConfig) -> list[FoldingRange]:
    """Keep comment/import/region ranges whose toggle is on, in input order.

    Ranges without a kind, or with any other kind, are always dropped.
    """
    enabled = _enabled_kinds(config)
    return [item for item in ranges if item.kind is not None and item.kind in enabled]
