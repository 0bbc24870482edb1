"""Path helper utilities."""

from __future__ import annotations

import os
from pathlib import Path

SETTINGS_FILENAME = "tjs-ctags.yaml"


def join_workspace(root: str, relative: str, *, sep: str = os.sep) -> str:
    """Join a workspace-relative path onto the root textually.

    No normalization happens: an empty ``relative`` yields ``root`` followed by
    the separator, which is what the indexer's scan-root argument expects.
    """
    return f"{root}{sep}{relative}"


def scan_root(root: str, search_path: str, *, sep: str = os.sep) -> str:
    """Return the wildcard scan root handed to the indexer."""
    return join_workspace(root, search_path, sep=sep) + "*"


def default_settings_file(workspace: str | Path) -> Path:
    """Return the settings file location inside a workspace."""
    return Path(workspace) / SETTINGS_FILENAME


def same_file(left: str | Path, right: str | Path) -> bool:
    """Compare two paths after resolving them."""
    return Path(left).resolve() == Path(right).resolve()


__all__ = ["SETTINGS_FILENAME", "default_settings_file", "join_workspace", "same_file", "scan_root"]
