"""Turn filesystem events in a workspace into provider triggers."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .logging import get_logger
from .paths import same_file
from .provider import TagIndexProvider

LOGGER = get_logger(__name__)


class WorkspaceEventHandler(FileSystemEventHandler):
    """Forward saves of dialect files and settings changes to a provider."""

    def __init__(self, provider: TagIndexProvider, *, settings_only: bool = False) -> None:
        super().__init__()
        self.provider = provider
        self.settings_only = settings_only

    def _is_settings_file(self, path: str) -> bool:
        settings_file = self.provider.settings_file
        return settings_file is not None and same_file(path, settings_file)

    def _is_tag_output(self, path: str) -> bool:
        root = self.provider.workspace_root
        if root is None:
            return False
        return any(
            config.tag_file_path and same_file(path, Path(root) / config.tag_file_path)
            for config in self.provider.config_set
        )

    def _handle(self, path: str) -> None:
        if self._is_settings_file(path):
            self.provider.on_did_change_configuration()
            return
        if self.settings_only or self._is_tag_output(path):
            return
        language_id = self.provider.language_id_for(path)
        LOGGER.debug("Saved %s (%s)", path, language_id or "unknown")
        self.provider.on_did_save(language_id)

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._handle(str(event.src_path))

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._handle(str(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._handle(str(event.dest_path))


def watch(provider: TagIndexProvider, *, poll_interval: float = 1.0, duration: Optional[float] = None) -> None:
    """Watch the provider's workspace until interrupted or ``duration`` elapses."""
    if provider.workspace_root is None:
        raise ValueError("Cannot watch without a workspace root")
    observer = Observer()
    observer.schedule(WorkspaceEventHandler(provider), provider.workspace_root, recursive=True)
    settings_file = provider.settings_file
    if settings_file is not None and not settings_file.resolve().is_relative_to(Path(provider.workspace_root).resolve()):
        observer.schedule(WorkspaceEventHandler(provider, settings_only=True), str(settings_file.parent), recursive=False)
    observer.start()
    LOGGER.info("Watching %s for changes", provider.workspace_root)
    started = time.monotonic()
    try:
        while observer.is_alive():
            if duration is not None and time.monotonic() - started >= duration:
                break
            time.sleep(poll_interval)
    except KeyboardInterrupt:
        LOGGER.info("Stopping watcher")
    finally:
        observer.stop()
        observer.join()


__all__ = ["WorkspaceEventHandler", "watch"]
