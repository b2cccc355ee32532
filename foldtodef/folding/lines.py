"""Union of selected symbols and folding ranges into fold target lines."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .config import FoldConfig
from .ranges import select_folding_ranges
from .selector import select_foldable
from .types import FoldingRange, Symbol


@dataclass(frozen=True)
class FoldPlan:
    """Outcome of one fold computation.

    ``lines`` is sorted and duplicate-free. An empty plan means there is
    nothing to fold and the fold executor should not be invoked.
    """

    lines: tuple[int, ...]
    symbols: tuple[Symbol, ...] = ()
    folding_ranges: tuple[FoldingRange, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def __bool__(self) -> bool:
        return bool(self.lines)


NOTHING_TO_FOLD = FoldPlan(lines=())


def compute_fold_lines(
    symbols: Sequence[Symbol] | None,
    folding_ranges: Sequence[FoldingRange] | None,
    config: FoldConfig,
) -> FoldPlan:
    """Compute the start lines to fold for one document.

    ``None`` inputs are treated as empty outlines. Returns ``NOTHING_TO_FOLD``
    when neither symbols nor folding ranges qualify.
    """
    selected_symbols = select_foldable(symbols or (), config)
    selected_ranges = select_folding_ranges(folding_ranges or (), config)

    line_set = {symbol.start_line for symbol in selected_symbols}
    line_set.update(item.start for item in selected_ranges)
    if not line_set:
        return NOTHING_TO_FOLD

    return FoldPlan(
        lines=tuple(sorted(line_set)),
        symbols=tuple(selected_symbols),
        folding_ranges=tuple(selected_ranges),
    )
