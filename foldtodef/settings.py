"""Persistent JSON settings for fold-to-definitions.

Settings live under the ``foldToDefinitions`` section of a JSON object in the
user config directory. Reads are defensive: a missing, unreadable or malformed
file yields default settings.
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

from platformdirs import user_config_dir

from .folding.config import (
    FoldConfig,
    coerce_setting,
    config_from_mapping,
    config_to_mapping,
)

logger = logging.getLogger(__name__)

APP_NAME = "foldtodef"
CONFIG_FILENAME = "settings.json"
SETTINGS_SECTION = "foldToDefinitions"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
BACKUP_SUFFIX = ".bak"


def _read_settings_object(config_path: Path) -> dict[str, object] | None:
    """Return the file's JSON object, ``{}`` when missing, ``None`` when unusable."""
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", config_path, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: top level is not a JSON object", config_path)
        return None
    return data


def load_raw_settings(path: Path | None = None) -> dict[str, object]:
    """Load the persisted top-level JSON object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a JSON object.
    """
    data = _read_settings_object(path if path is not None else CONFIG_PATH)
    return data if data is not None else {}


def _section(data: dict[str, object]) -> dict[str, object]:
    section = data.get(SETTINGS_SECTION)
    return dict(section) if isinstance(section, dict) else {}


def load_settings(path: Path | None = None) -> FoldConfig:
    """Return the effective ``FoldConfig`` from disk, defaulting missing keys."""
    return config_from_mapping(_section(load_raw_settings(path)))


def save_settings(config: FoldConfig, path: Path | None = None) -> None:
    """Persist ``config`` as pretty-printed JSON.

    Other top-level sections of the file are preserved. An unreadable existing
    file is copied to ``<name>.bak`` before being replaced. Filesystem errors
    are logged and otherwise ignored.
    """
    config_path = path if path is not None else CONFIG_PATH
    data = _read_settings_object(config_path)
    try:
        if data is None:
            backup_path = config_path.with_name(config_path.name + BACKUP_SUFFIX)
            shutil.copyfile(config_path, backup_path)
            logger.warning(
                "Replacing unreadable settings file %s; previous contents kept in %s",
                config_path,
                backup_path,
            )
            data = {}
        data[SETTINGS_SECTION] = config_to_mapping(config)
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not write settings file %s: %s", config_path, exc)


def update_setting(key: str, value: object, path: Path | None = None) -> FoldConfig:
    """Validate and persist a single camelCase setting.

    Raises ``KeyError`` for unknown keys and ``ValueError`` for bad values.
    Returns the resulting configuration.
    """
    coerced = coerce_setting(key, value)
    config_path = path if path is not None else CONFIG_PATH
    section = _section(load_raw_settings(config_path))
    section[key] = getattr(coerced, "value", coerced)
    config = config_from_mapping(section)
    save_settings(config, config_path)
    return config
