"""Build the ctags command line for one process entry."""

from __future__ import annotations

import os

from .config import ProcessConfig
from .paths import join_workspace, scan_root

CTAGS_BINARY = "ctags"
LANGUAGE = "tjs"

# Each rule binds a line-anchored pattern and captures the identifier as \1.
TAG_RULES: tuple[str, ...] = (
    r"/^[ \t]*class[ \t]+([a-zA-Z0-9_]+)/\1/c,class/",
    r"/^[ \t]*function[ \t]+([a-zA-Z0-9_]+)/\1/f,function/",
    r"/^[ \t]*property[ \t]+([a-zA-Z0-9_]+)/\1/p,property/",
    r"/^[ \t]*var[ \t]+([a-zA-Z0-9_]+)/\1/v,value/",
    r"/^[ \t]*const[ \t]+([a-zA-Z0-9_]+)/\1/v,value/",
    r"/^[ \t]*([a-zA-Z0-9_]+)[ \t]*:[ \t]*function/\1/f,function/",
    r"/([a-zA-Z0-9_]+)[ \t]*=[ \t]*function/\1/f,function/",
)


def langmap(config: ProcessConfig) -> str:
    return ",".join(config.file_extensions)


def _quoted(value: str) -> str:
    return f'"{value}"'


def build_command(config: ProcessConfig, workspace_root: str, *, sep: str = os.sep) -> str:
    """Return the shell command line that indexes ``config`` under ``workspace_root``.

    The entry is assumed to be validated already: ``tag_file_path`` and
    ``file_extensions`` are non-empty.
    """
    parts: list[str] = [
        CTAGS_BINARY,
        f"--langdef={LANGUAGE}",
        f"--langmap={LANGUAGE}:{langmap(config)}",
    ]
    parts.extend(f"--regex-{LANGUAGE}={_quoted(rule)}" for rule in TAG_RULES)
    if config.extra_option:
        parts.append(config.extra_option)
    parts.extend(["-f", _quoted(join_workspace(workspace_root, config.tag_file_path, sep=sep))])
    if config.search_recursive:
        parts.append("-R")
    parts.append(_quoted(scan_root(workspace_root, config.search_path, sep=sep)))
    return " ".join(parts)


__all__ = ["CTAGS_BINARY", "LANGUAGE", "TAG_RULES", "build_command", "langmap"]
