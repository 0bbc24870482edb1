"""Diagnostics reported to the user.

Validation problems and indexer failures are never raised. Each one becomes a
single :class:`Diagnostic` handed to a sink, which by default logs it at ERROR
level. Sinks may be called from process watcher threads.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Optional

from .logging import get_logger

LOGGER = get_logger(__name__)

SETTINGS_KEY = "tjs.ctagsProcess"


class DiagnosticKind(str, Enum):
    CONFIG_TYPE_MISMATCH = "config-type-mismatch"
    MISSING_WORKSPACE = "missing-workspace"
    EMPTY_REQUIRED_FIELD = "empty-required-field"
    PROCESS_FAILURE = "process-failure"
    INVALID_SETTINGS = "invalid-settings"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    kind: DiagnosticKind
    message: str
    index: Optional[int] = None
    field: Optional[str] = None

    def __str__(self) -> str:
        return self.message


DiagnosticSink = Callable[[Diagnostic], None]


def entry_label(index: int, field: str | None = None) -> str:
    """Return the settings path of an entry or one of its fields."""
    label = f"{SETTINGS_KEY}[{index}]"
    return f"{label}.{field}" if field else label


def config_type_mismatch(index: int | None, field: str | None = None) -> Diagnostic:
    target = SETTINGS_KEY if index is None else entry_label(index, field)
    return Diagnostic(
        kind=DiagnosticKind.CONFIG_TYPE_MISMATCH,
        message=f"{target} has wrong value.",
        index=index,
        field=field,
    )


def empty_required_field(index: int, field: str) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.EMPTY_REQUIRED_FIELD,
        message=f"{entry_label(index, field)} is empty.",
        index=index,
        field=field,
    )


def missing_workspace() -> Diagnostic:
    return Diagnostic(kind=DiagnosticKind.MISSING_WORKSPACE, message="No project currently opened")


def process_failure(index: int, detail: str) -> Diagnostic:
    return Diagnostic(kind=DiagnosticKind.PROCESS_FAILURE, message=f"ctags:{detail}", index=index)


def invalid_settings(detail: str) -> Diagnostic:
    return Diagnostic(kind=DiagnosticKind.INVALID_SETTINGS, message=detail)


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default sink: log the message."""
    LOGGER.error("%s", diagnostic.message)


class DiagnosticCollector:
    """Thread-safe sink that records diagnostics and forwards them to another sink."""

    def __init__(self, forward: DiagnosticSink | None = log_diagnostic) -> None:
        self._forward = forward
        self._lock = threading.Lock()
        self._items: list[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        with self._lock:
            self._items.append(diagnostic)
        if self._forward is not None:
            self._forward(diagnostic)

    def __iter__(self) -> Iterator[Diagnostic]:
        with self._lock:
            return iter(list(self._items))

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    @property
    def messages(self) -> list[str]:
        return [item.message for item in self]


__all__ = [
    "SETTINGS_KEY",
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticKind",
    "DiagnosticSink",
    "config_type_mismatch",
    "empty_required_field",
    "entry_label",
    "invalid_settings",
    "log_diagnostic",
    "missing_workspace",
    "process_failure",
]
