"""Fold-to-definitions orchestration around external editor collaborators.

A ``FoldSession`` fetches the outline of a document from its providers,
computes the fold plan with the current settings, and drives a fold executor
(unfold everything, then fold the planned lines). Runs for the same document
are serialized so unfold/fold pairs never interleave.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from typing import Protocol

from .folding.config import FoldConfig
from .folding.lines import FoldPlan, compute_fold_lines
from .folding.types import FoldingRange, Symbol
from .lsp import Outline
from .settings import SETTINGS_SECTION, load_settings

logger = logging.getLogger(__name__)


class SymbolProvider(Protocol):
    def document_symbols(self, uri: str) -> Sequence[Symbol] | None: ...


class FoldingRangeProvider(Protocol):
    def folding_ranges(self, uri: str) -> Sequence[FoldingRange] | None: ...


class FoldExecutor(Protocol):
    def unfold_all(self, uri: str) -> None: ...

    def fold(self, uri: str, lines: Sequence[int]) -> None: ...


class StaticOutlineProvider:
    """Serve pre-decoded outlines as both symbol and folding-range provider."""

    def __init__(self, outlines: Iterable[Outline] = ()) -> None:
        self._outlines: dict[str, Outline] = {outline.uri: outline for outline in outlines}

    def add(self, outline: Outline) -> None:
        self._outlines[outline.uri] = outline

    def document_symbols(self, uri: str) -> Sequence[Symbol] | None:
        outline = self._outlines.get(uri)
        return outline.symbols if outline is not None else None

    def folding_ranges(self, uri: str) -> Sequence[FoldingRange] | None:
        outline = self._outlines.get(uri)
        return outline.folding_ranges if outline is not None else None


class RecordingFoldExecutor:
    """In-memory executor tracking folded start lines per document."""

    def __init__(self) -> None:
        self._folded: dict[str, set[int]] = {}
        self.calls: list[tuple[str, str, tuple[int, ...]]] = []

    def unfold_all(self, uri: str) -> None:
        self.calls.append(("unfold_all", uri, ()))
        self._folded.pop(uri, None)

    def fold(self, uri: str, lines: Sequence[int]) -> None:
        self.calls.append(("fold", uri, tuple(lines)))
        self._folded.setdefault(uri, set()).update(lines)

    def folded(self, uri: str) -> tuple[int, ...]:
        return tuple(sorted(self._folded.get(uri, ())))


class _DocumentLock:
    """Per-document lock plus the number of runs holding or waiting on it."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class FoldSession:
    """Editor-facing fold command, file-open hook, and settings listener."""

    def __init__(
        self,
        symbol_provider: SymbolProvider,
        folding_range_provider: FoldingRangeProvider,
        executor: FoldExecutor,
        settings_loader: Callable[[], FoldConfig] = load_settings,
    ) -> None:
        self._symbol_provider = symbol_provider
        self._folding_range_provider = folding_range_provider
        self._executor = executor
        self._settings_loader = settings_loader
        self._config = settings_loader()
        self._locks_guard = threading.Lock()
        self._document_locks: dict[str, _DocumentLock] = {}

    @property
    def config(self) -> FoldConfig:
        return self._config

    def reload_config(self) -> FoldConfig:
        """Replace the current settings snapshot with a fresh read."""
        self._config = self._settings_loader()
        logger.debug("Reloaded fold settings: %s", self._config)
        return self._config

    def on_config_changed(self, section: str) -> bool:
        """Reload settings when ``section`` affects fold settings."""
        affected = section == SETTINGS_SECTION or section.startswith(SETTINGS_SECTION + ".")
        logger.debug("Configuration changed: %s (affects folding: %s)", section, affected)
        if affected:
            self.reload_config()
        return affected

    def on_document_opened(self, uri: str) -> FoldPlan | None:
        """Fold a newly opened document when fold-on-open is enabled."""
        logger.debug("File opened: %s", uri)
        if not self._config.fold_on_file_open:
            return None
        return self.fold_to_definitions(uri)

    @property
    def tracked_documents(self) -> tuple[str, ...]:
        """URIs with a fold run in flight or waiting."""
        with self._locks_guard:
            return tuple(self._document_locks)

    @contextmanager
    def _document_lock(self, uri: str) -> Iterator[None]:
        """Hold the lock for ``uri``; the entry is dropped once nobody uses it."""
        with self._locks_guard:
            entry = self._document_locks.get(uri)
            if entry is None:
                entry = _DocumentLock()
                self._document_locks[uri] = entry
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._document_locks[uri]

    def fold_to_definitions(self, uri: str) -> FoldPlan:
        """Fold ``uri`` down to its definitions and return the applied plan."""
        with self._document_lock(uri):
            logger.debug("Folding to definitions in: %s", uri)
            config = self._config
            symbols = self._symbol_provider.document_symbols(uri) or ()
            folding_ranges = self._folding_range_provider.folding_ranges(uri) or ()
            plan = compute_fold_lines(symbols, folding_ranges, config)
            if plan.is_empty:
                logger.info("Nothing to fold in %s", uri)
                return plan

            for symbol in plan.symbols:
                logger.debug("Folding %s %s in line %d", symbol.kind_label, symbol.name, symbol.selection_line + 1)

            self._executor.unfold_all(uri)
            self._executor.fold(uri, plan.lines)
            return plan
