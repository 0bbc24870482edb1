"""Process-wide holder of the ctags configuration and its triggers."""

from __future__ import annotations

from pathlib import Path

from .command import LANGUAGE
from .config import ConfigSet, normalize
from .diagnostics import DiagnosticSink, invalid_settings, log_diagnostic
from .logging import get_logger
from .runner import CtagsJob, Spawner, Trigger, run
from .settings import SettingsError, read_process_settings, resolve_settings_file

LOGGER = get_logger(__name__)


class TagIndexProvider:
    """Keep the normalized configuration and run ctags on manual and save triggers.

    The configuration set is loaded once on construction and replaced wholesale
    by :meth:`on_did_change_configuration`.
    """

    def __init__(
        self,
        workspace_root: str | Path | None,
        *,
        settings_file: str | Path | None = None,
        sink: DiagnosticSink | None = None,
        spawn: Spawner | None = None,
    ) -> None:
        self.workspace_root = None if workspace_root is None else str(workspace_root)
        self.settings_file = resolve_settings_file(workspace_root, settings_file)
        self.sink = log_diagnostic if sink is None else sink
        self.spawn = spawn
        self.config_set: ConfigSet = ()
        self._load_configuration()

    def _load_configuration(self) -> None:
        raw = read_process_settings(self.settings_file)
        self.config_set = normalize(raw, self.sink)

    def update_ctags(self, trigger: Trigger = Trigger.MANUAL) -> list[CtagsJob]:
        return run(self.config_set, trigger, self.workspace_root, sink=self.sink, spawn=self.spawn)

    def on_did_save(self, language_id: str) -> list[CtagsJob]:
        if language_id != LANGUAGE:
            return []
        return self.update_ctags(Trigger.ON_SAVE)

    def on_did_change_configuration(self) -> None:
        """Reload settings; an unreadable file is reported and the current set kept."""
        LOGGER.info("Reloading ctags configuration from %s", self.settings_file)
        try:
            self._load_configuration()
        except SettingsError as error:
            self.sink(invalid_settings(str(error)))

    def language_id_for(self, path: str | Path) -> str:
        """Return the dialect id for files with a configured extension, else the bare suffix."""
        suffix = Path(path).suffix
        for config in self.config_set:
            if suffix and suffix in config.file_extensions:
                return LANGUAGE
        return suffix.lstrip(".")


__all__ = ["TagIndexProvider"]
