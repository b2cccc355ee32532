"""Fold-session orchestration tests.

Verifies provider/executor sequencing, settings reloads, the file-open hook,
and per-document serialization of fold runs.
"""

from __future__ import annotations

import threading
import unittest
from unittest import mock

from foldtodef.folding import (
    FoldClassAndInterface,
    FoldConfig,
    FoldingRange,
    FoldingRangeKind,
    Range,
    Symbol,
    SymbolKind,
)
from foldtodef.lsp import Outline
from foldtodef.session import FoldSession, RecordingFoldExecutor, StaticOutlineProvider

URI = "file:///project/app.py"


def sym(kind: int, start: int, end: int, name: str = "", children: tuple[Symbol, ...] = ()) -> Symbol:
    return Symbol(name=name, kind=kind, range=Range.lines(start, end), children=children)


def sample_outline() -> Outline:
    return Outline(
        uri=URI,
        symbols=(
            sym(SymbolKind.CLASS, 4, 20, "App", children=(sym(SymbolKind.METHOD, 6, 10, "run"),)),
            sym(SymbolKind.FUNCTION, 22, 30, "main"),
        ),
        folding_ranges=(FoldingRange(start=0, end=2, kind=FoldingRangeKind.IMPORTS),),
    )


class FoldSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.provider = StaticOutlineProvider([sample_outline()])
        self.executor = RecordingFoldExecutor()

    def make_session(self, config: FoldConfig | None = None) -> FoldSession:
        loaded = config if config is not None else FoldConfig()
        return FoldSession(self.provider, self.provider, self.executor, settings_loader=lambda: loaded)

    def test_fold_unfolds_all_then_folds_plan(self) -> None:
        session = self.make_session()

        plan = session.fold_to_definitions(URI)

        self.assertEqual(plan.lines, (0, 6, 22))
        self.assertEqual(
            self.executor.calls,
            [("unfold_all", URI, ()), ("fold", URI, (0, 6, 22))],
        )
        self.assertEqual(self.executor.folded(URI), (0, 6, 22))

    def test_nothing_to_fold_skips_executor(self) -> None:
        session = self.make_session(FoldConfig(fold_import=False))

        plan = session.fold_to_definitions("file:///unknown.py")

        self.assertTrue(plan.is_empty)
        self.assertEqual(self.executor.calls, [])

    def test_refolding_is_idempotent(self) -> None:
        session = self.make_session()

        session.fold_to_definitions(URI)
        first = self.executor.folded(URI)
        session.fold_to_definitions(URI)

        self.assertEqual(self.executor.folded(URI), first)

    def test_finished_runs_release_document_tracking(self) -> None:
        session = self.make_session()

        session.fold_to_definitions(URI)
        session.fold_to_definitions("file:///unknown.py")

        self.assertEqual(session.tracked_documents, ())

    def test_logs_each_folded_symbol(self) -> None:
        session = self.make_session()
        with self.assertLogs("foldtodef.session", level="DEBUG") as logs:
            session.fold_to_definitions(URI)
        self.assertIn("Folding Method run in line 7", "\n".join(logs.output))
        self.assertIn("Folding Function main in line 23", "\n".join(logs.output))

    def test_config_change_reloads_only_for_fold_section(self) -> None:
        configs = iter([FoldConfig(), FoldConfig(fold_class_and_interface=FoldClassAndInterface.ALL)])
        session = FoldSession(self.provider, self.provider, self.executor, settings_loader=lambda: next(configs))

        self.assertFalse(session.on_config_changed("editor.tabSize"))
        self.assertIs(session.config.fold_class_and_interface, FoldClassAndInterface.NONE)

        self.assertTrue(session.on_config_changed("foldToDefinitions"))
        self.assertIs(session.config.fold_class_and_interface, FoldClassAndInterface.ALL)
        self.assertEqual(session.fold_to_definitions(URI).lines, (0, 4, 6, 22))

    def test_document_open_respects_fold_on_file_open(self) -> None:
        self.assertIsNone(self.make_session().on_document_opened(URI))
        self.assertEqual(self.executor.calls, [])

        plan = self.make_session(FoldConfig(fold_on_file_open=True)).on_document_opened(URI)

        self.assertIsNotNone(plan)
        self.assertEqual(self.executor.folded(URI), (0, 6, 22))

    def test_provider_failure_propagates_without_folding(self) -> None:
        session = self.make_session()
        with mock.patch.object(self.provider, "folding_ranges", side_effect=RuntimeError("provider down")):
            with self.assertRaises(RuntimeError):
                session.fold_to_definitions(URI)
        self.assertEqual(self.executor.calls, [])
        self.assertEqual(session.tracked_documents, ())

        session.fold_to_definitions(URI)
        self.assertEqual(self.executor.folded(URI), (0, 6, 22))

    def test_same_document_runs_do_not_interleave(self) -> None:
        entered = threading.Event()
        release = threading.Event()
        order: list[str] = []

        class SlowProvider(StaticOutlineProvider):
            def document_symbols(self, uri):
                order.append("symbols")
                if not entered.is_set():
                    entered.set()
                    release.wait(timeout=5)
                return super().document_symbols(uri)

        class OrderedExecutor(RecordingFoldExecutor):
            def unfold_all(self, uri):
                order.append("unfold_all")
                super().unfold_all(uri)

            def fold(self, uri, lines):
                order.append("fold")
                super().fold(uri, lines)

        provider = SlowProvider([sample_outline()])
        executor = OrderedExecutor()
        session = FoldSession(provider, provider, executor, settings_loader=FoldConfig)

        first = threading.Thread(target=session.fold_to_definitions, args=(URI,))
        second = threading.Thread(target=session.fold_to_definitions, args=(URI,))
        first.start()
        self.assertTrue(entered.wait(timeout=5))
        second.start()
        second.join(timeout=0.2)
        self.assertTrue(second.is_alive())
        self.assertEqual(session.tracked_documents, (URI,))
        release.set()
        first.join(timeout=5)
        second.join(timeout=5)

        self.assertEqual(order, ["symbols", "unfold_all", "fold", "symbols", "unfold_all", "fold"])
        self.assertEqual(session.tracked_documents, ())


if __name__ == "__main__":
    unittest.main()
