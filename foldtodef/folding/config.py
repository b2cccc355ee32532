"""Immutable fold-selection configuration.

Values arrive as a camelCase mapping (the ``foldToDefinitions`` settings
section). Decoding is defensive: missing keys and wrongly typed values fall
back to defaults instead of raising.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum


class FoldClassAndInterface(str, Enum):
    """Which class/interface symbols are folded."""

    NONE = "None"
    INNER_CLASS_ONLY = "Inner class"
    ALL = "All"

    @classmethod
    def parse(cls, value: object) -> "FoldClassAndInterface":
        """Decode a user-facing value, raising ``ValueError`` when unknown."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"invalid foldClassAndInterface value: {value!r}")
        key = value.strip().casefold().replace("_", " ")
        for option in cls:
            if key == option.value.casefold():
                return option
        if key in {"innerclassonly", "inner class only", "inner"}:
            return cls.INNER_CLASS_ONLY
        raise ValueError(f"invalid foldClassAndInterface value: {value!r}")


# camelCase settings key -> FoldConfig attribute
SETTING_FIELDS: dict[str, str] = {
    "foldRegion": "fold_region",
    "foldImport": "fold_import",
    "foldComment": "fold_comment",
    "foldClassAndInterface": "fold_class_and_interface",
    "foldInnerClass": "fold_inner_class",
    "foldLocalFunction": "fold_local_function",
    "foldOnFileOpen": "fold_on_file_open",
}


@dataclass(frozen=True)
class FoldConfig:
    """One evaluation's worth of fold settings.

    ``fold_inner_class`` is a legacy toggle kept for round-tripping stored
    settings; selection is governed by ``fold_class_and_interface``.
    """

    fold_region: bool = True
    fold_import: bool = True
    fold_comment: bool = True
    fold_class_and_interface: FoldClassAndInterface = FoldClassAndInterface.NONE
    fold_inner_class: bool = False
    fold_local_function: bool = False
    fold_on_file_open: bool = False


DEFAULT_CONFIG = FoldConfig()


def coerce_setting(key: str, value: object) -> object:
    """Validate one setting value for ``key``.

    Raises ``KeyError`` for unknown keys and ``ValueError`` for values of the
    wrong type. Booleans must be real ``bool`` instances.
    """
    if key not in SETTING_FIELDS:
        raise KeyError(key)
    if key == "foldClassAndInterface":
        return FoldClassAndInterface.parse(value)
    if not isinstance(value, bool):
        raise ValueError(f"{key} expects a boolean, got {value!r}")
    return value


def config_from_mapping(mapping: Mapping[str, object] | None) -> FoldConfig:
    """Build a ``FoldConfig`` from camelCase settings, defaulting bad entries."""
    if not mapping:
        return DEFAULT_CONFIG

    values: dict[str, object] = {}
    for key, field_name in SETTING_FIELDS.items():
        if key not in mapping:
            continue
        try:
            values[field_name] = coerce_setting(key, mapping[key])
        except ValueError:
            continue
    return FoldConfig(**values)


def config_to_mapping(config: FoldConfig) -> dict[str, object]:
    """Serialize ``config`` back to camelCase JSON-compatible values."""
    out: dict[str, object] = {}
    for key, field_name in SETTING_FIELDS.items():
        value = getattr(config, field_name)
        out[key] = value.value if isinstance(value, FoldClassAndInterface) else value
    return out
