"""Decode LSP-shaped outline JSON into fold-core datatypes.

Accepts ``textDocument/documentSymbol`` results in either hierarchical
(``DocumentSymbol``) or flat (``SymbolInformation``) form, and
``textDocument/foldingRange`` results. Flat symbol lists decode to top-level
symbols without children.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path

from .folding.types import FoldingRange, FoldingRangeKind, Position, Range, Symbol

_FOLDING_RANGE_KINDS = {kind.value: kind for kind in FoldingRangeKind}


class OutlineError(ValueError):
    """Raised when outline JSON does not have the expected LSP shape."""

    def __init__(self, where: str, message: str) -> None:
        super().__init__(f"{where}: {message}")
        self.where = where


@dataclass(frozen=True)
class Outline:
    """Symbols and folding ranges reported for one document."""

    uri: str
    symbols: tuple[Symbol, ...] = ()
    folding_ranges: tuple[FoldingRange, ...] = ()


def _require_object(value: object, where: str) -> dict:
    if not isinstance(value, dict):
        raise OutlineError(where, "expected a JSON object")
    return value


def _require_int(value: object, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise OutlineError(where, f"expected an integer, got {value!r}")
    if value < 0:
        raise OutlineError(where, f"expected a non-negative integer, got {value}")
    return value


def _optional_list(value: object, where: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise OutlineError(where, "expected a JSON array")
    return value


def decode_position(raw: object, where: str) -> Position:
    data = _require_object(raw, where)
    return Position(
        line=_require_int(data.get("line"), f"{where}.line"),
        character=_require_int(data.get("character", 0), f"{where}.character"),
    )


def decode_range(raw: object, where: str) -> Range:
    data = _require_object(raw, where)
    return Range(
        start=decode_position(data.get("start"), f"{where}.start"),
        end=decode_position(data.get("end"), f"{where}.end"),
    )


def decode_symbol(raw: object, where: str = "symbols[0]") -> Symbol:
    """Decode one ``DocumentSymbol`` or ``SymbolInformation`` object."""
    data = _require_object(raw, where)
    name = data.get("name", "")
    if not isinstance(name, str):
        raise OutlineError(f"{where}.name", "expected a string")
    kind = _require_int(data.get("kind"), f"{where}.kind")

    if "range" in data:
        symbol_range = decode_range(data["range"], f"{where}.range")
        selection_raw = data.get("selectionRange")
        selection_range = (
            decode_range(selection_raw, f"{where}.selectionRange") if selection_raw is not None else None
        )
    elif "location" in data:
        location = _require_object(data["location"], f"{where}.location")
        symbol_range = decode_range(location.get("range"), f"{where}.location.range")
        selection_range = None
    else:
        raise OutlineError(where, "symbol has neither 'range' nor 'location'")

    children_raw = _optional_list(data.get("children"), f"{where}.children")
    children = tuple(
        decode_symbol(child, f"{where}.children[{index}]") for index, child in enumerate(children_raw)
    )
    detail = data.get("detail") or ""
    return Symbol(
        name=name,
        kind=kind,
        range=symbol_range,
        children=children,
        selection_range=selection_range,
        detail=detail if isinstance(detail, str) else str(detail),
    )


def decode_folding_range(raw: object, where: str = "foldingRanges[0]") -> FoldingRange:
    """Decode one LSP ``FoldingRange``; unknown kinds decode to ``None``."""
    data = _require_object(raw, where)
    start = _require_int(data.get("startLine"), f"{where}.startLine")
    end_raw = data.get("endLine")
    end = _require_int(end_raw, f"{where}.endLine") if end_raw is not None else None
    kind_raw = data.get("kind")
    kind = _FOLDING_RANGE_KINDS.get(kind_raw) if isinstance(kind_raw, str) else None
    return FoldingRange(start=start, end=end, kind=kind)


def decode_symbols(raw: object) -> tuple[Symbol, ...]:
    items = _optional_list(raw, "symbols")
    return tuple(decode_symbol(item, f"symbols[{index}]") for index, item in enumerate(items))


def decode_folding_ranges(raw: object) -> tuple[FoldingRange, ...]:
    items = _optional_list(raw, "foldingRanges")
    return tuple(decode_folding_range(item, f"foldingRanges[{index}]") for index, item in enumerate(items))


def decode_outline(raw: object, default_uri: str = "") -> Outline:
    """Decode a ``{"uri", "symbols", "foldingRanges"}`` document."""
    data = _require_object(raw, "outline")
    uri = data.get("uri") or default_uri
    if not isinstance(uri, str):
        raise OutlineError("uri", "expected a string")
    return Outline(
        uri=uri,
        symbols=decode_symbols(data.get("symbols")),
        folding_ranges=decode_folding_ranges(data.get("foldingRanges")),
    )


def read_outline(source: str) -> Outline:
    """Read and decode an outline document from a path, or stdin for ``-``.

    Raises ``OSError`` when the file cannot be read and ``OutlineError`` for
    invalid UTF-8, invalid JSON or unexpected structure.
    """
    try:
        if source == "-":
            text = sys.stdin.read()
            default_uri = "stdin"
        else:
            path = Path(source)
            text = path.read_text(encoding="utf-8")
            default_uri = path.resolve().as_uri()
    except UnicodeDecodeError as exc:
        raise OutlineError("outline", f"invalid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise OutlineError("outline", f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    return decode_outline(raw, default_uri=default_uri)
