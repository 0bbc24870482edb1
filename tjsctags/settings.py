"""Read the raw ``tjs.ctagsProcess`` value from the workspace settings file."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .logging import get_logger
from .paths import default_settings_file

LOGGER = get_logger(__name__)

NAMESPACE = "tjs"
PROPERTY = "ctagsProcess"


class SettingsError(ValueError):
    """The settings file exists but cannot be used."""


def resolve_settings_file(workspace: str | Path | None, settings_file: str | Path | None = None) -> Path | None:
    if settings_file is not None:
        return Path(settings_file)
    if workspace is None:
        return None
    return default_settings_file(workspace)


def load_settings(path: Path | None) -> dict[str, Any]:
    if path is None or not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as error:
        raise SettingsError(f"Failed to parse {path}: {error}") from error
    if not isinstance(data, dict):
        raise SettingsError(f"{path} must contain a mapping")
    return data


def read_process_settings(path: Path | None) -> Any:
    """Return the raw process list, or ``None`` when it is not configured.

    Both a ``tjs:`` section with a ``ctagsProcess`` key and a flat
    ``tjs.ctagsProcess`` key are understood; the flat key wins.
    """
    data = load_settings(path)
    flat_key = f"{NAMESPACE}.{PROPERTY}"
    if flat_key in data:
        return data[flat_key]
    section = data.get(NAMESPACE)
    if isinstance(section, dict):
        return section.get(PROPERTY)
    if section is not None:
        LOGGER.warning("Ignoring '%s' in %s: expected a mapping", NAMESPACE, path)
    return None


__all__ = ["NAMESPACE", "PROPERTY", "SettingsError", "load_settings", "read_process_settings", "resolve_settings_file"]
