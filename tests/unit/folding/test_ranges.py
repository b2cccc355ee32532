from __future__ import annotations

import unittest

from foldtodef.folding import FoldConfig, FoldingRange, FoldingRangeKind, select_folding_ranges


class SelectFoldingRangesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.ranges = [
            FoldingRange(start=0, end=3, kind=FoldingRangeKind.IMPORTS),
            FoldingRange(start=5, end=8, kind=FoldingRangeKind.COMMENT),
            FoldingRange(start=10, end=30, kind=FoldingRangeKind.REGION),
            FoldingRange(start=12, end=14, kind=None),
        ]

    def test_defaults_keep_all_tagged_kinds_in_order(self) -> None:
        kept = select_folding_ranges(self.ranges, FoldConfig())
        self.assertEqual([item.start for item in kept], [0, 5, 10])

    def test_each_toggle_gates_its_kind(self) -> None:
        cases = [
            (FoldConfig(fold_comment=False), [0, 10]),
            (FoldConfig(fold_import=False), [5, 10]),
            (FoldConfig(fold_region=False), [0, 5]),
            (FoldConfig(fold_comment=False, fold_import=False, fold_region=False), []),
        ]
        for config, expected in cases:
            with self.subTest(config=config):
                kept = select_folding_ranges(self.ranges, config)
                self.assertEqual([item.start for item in kept], expected)

    def test_comment_range_dropped_when_comments_disabled(self) -> None:
        comment = FoldingRange(start=5, kind=FoldingRangeKind.COMMENT)
        self.assertEqual(select_folding_ranges([comment], FoldConfig(fold_comment=False)), [])

    def test_untagged_ranges_are_always_dropped(self) -> None:
        untagged = [FoldingRange(start=1, end=4), FoldingRange(start=6, end=9)]
        self.assertEqual(select_folding_ranges(untagged, FoldConfig()), [])


if __name__ == "__main__":
    unittest.main()
