"""Shared outline datatypes consumed by the fold selection core."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class SymbolKind(IntEnum):
    """Symbol kinds using Language Server Protocol numbering."""

    FILE = 1
    MODULE = 2
    NAMESPACE = 3
    PACKAGE = 4
    CLASS = 5
    METHOD = 6
    PROPERTY = 7
    FIELD = 8
    CONSTRUCTOR = 9
    ENUM = 10
    INTERFACE = 11
    FUNCTION = 12
    VARIABLE = 13
    CONSTANT = 14
    STRING = 15
    NUMBER = 16
    BOOLEAN = 17
    ARRAY = 18
    OBJECT = 19
    KEY = 20
    NULL = 21
    ENUM_MEMBER = 22
    STRUCT = 23
    EVENT = 24
    OPERATOR = 25
    TYPE_PARAMETER = 26

    @property
    def label(self) -> str:
        """Title-cased kind name used in log lines, e.g. ``EnumMember``."""
        return "".join(part.title() for part in self.name.split("_"))


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line/character location."""

    line: int
    character: int = 0


@dataclass(frozen=True)
class Range:
    """Inclusive span between two positions."""

    start: Position
    end: Position

    @classmethod
    def lines(cls, start_line: int, end_line: int) -> "Range":
        """Build a range covering whole lines ``start_line..end_line``."""
        return cls(Position(start_line), Position(end_line))

    @property
    def is_single_line(self) -> bool:
        return self.start.line == self.end.line

    def strictly_contains(self, other: "Range") -> bool:
        """True when ``other`` starts after and ends before this range."""
        return self.start < other.start and self.end > other.end


@dataclass(frozen=True)
class Symbol:
    """One named construct of a document outline.

    ``kind`` is usually a ``SymbolKind``; providers may report integers outside
    the known enumeration, which are kept verbatim and never folded.
    """

    name: str
    kind: int
    range: Range
    children: tuple["Symbol", ...] = ()
    selection_range: Range | None = None
    detail: str = ""

    @property
    def start_line(self) -> int:
        return self.range.start.line

    @property
    def selection_line(self) -> int:
        """Line of the symbol's name, falling back to the range start."""
        target = self.selection_range if self.selection_range is not None else self.range
        return target.start.line

    @property
    def kind_label(self) -> str:
        try:
            return SymbolKind(self.kind).label
        except ValueError:
            return f"Unknown({self.kind})"


class FoldingRangeKind(str, Enum):
    """Structural folding-range tags, valued by their LSP wire strings."""

    COMMENT = "comment"
    IMPORTS = "imports"
    REGION = "region"


@dataclass(frozen=True)
class FoldingRange:
    """Flat structural fold region reported independently of symbols."""

    start: int
    end: int | None = None
    kind: FoldingRangeKind | None = None
