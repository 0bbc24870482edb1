"""Configuration models and normalization of ``tjs.ctagsProcess`` entries."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, TypeAdapter, ValidationError

from .diagnostics import DiagnosticSink, config_type_mismatch, log_diagnostic
from .logging import get_logger

LOGGER = get_logger(__name__)


class ProcessConfig(BaseModel):
    """One indexing job definition."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, strict=True)

    tag_file_path: StrictStr = Field(".tags", alias="tagFilePath")
    search_path: StrictStr = Field("", alias="searchPath")
    search_recursive: StrictBool = Field(True, alias="searchRecursive")
    run_on_save: StrictBool = Field(False, alias="runOnSave")
    file_extensions: Tuple[StrictStr, ...] = Field((".tjs",), alias="fileExtensions")
    extra_option: StrictStr = Field("", alias="extraOption")

    def to_settings(self) -> dict[str, Any]:
        """Return the entry keyed by its settings names."""
        payload = self.model_dump(by_alias=True)
        payload["fileExtensions"] = list(self.file_extensions)
        return payload


DEFAULT_PROCESS_CONFIG = ProcessConfig()

ConfigSet = Tuple[ProcessConfig, ...]


class ToolConfig(BaseModel):
    """Options shared by the command-line entry points."""

    workspace: Optional[Path] = None
    settings_file: Optional[Path] = None
    wait: bool = True
    log_level: str = "INFO"


# Settings names mapped to the type tag each value is checked against. The
# recognized key set is exactly the default record's fields.
_FIELD_ADAPTERS: dict[str, TypeAdapter[Any]] = {
    "tagFilePath": TypeAdapter(StrictStr),
    "searchPath": TypeAdapter(StrictStr),
    "searchRecursive": TypeAdapter(StrictBool),
    "runOnSave": TypeAdapter(StrictBool),
    "fileExtensions": TypeAdapter(List[StrictStr]),
    "extraOption": TypeAdapter(StrictStr),
}

_DEFAULT_SETTINGS = DEFAULT_PROCESS_CONFIG.to_settings()


def _matches_type(key: str, value: Any) -> bool:
    if key == "fileExtensions":
        # a bare string is iterable but is not a list of suffixes
        if not isinstance(value, (list, tuple)):
            return False
        value = list(value)
    try:
        _FIELD_ADAPTERS[key].validate_python(value, strict=True)
    except ValidationError:
        return False
    return True


def _normalize_entry(index: int, entry: Any, sink: DiagnosticSink) -> ProcessConfig:
    if isinstance(entry, ProcessConfig):
        return entry
    if entry is None:
        entry = {}
    if not isinstance(entry, Mapping):
        sink(config_type_mismatch(index))
        return DEFAULT_PROCESS_CONFIG

    values: dict[str, Any] = {}
    for key, default in _DEFAULT_SETTINGS.items():
        if key not in entry:
            values[key] = default
        elif not _matches_type(key, entry[key]):
            sink(config_type_mismatch(index, key))
            values[key] = default
        else:
            values[key] = entry[key]
    values["fileExtensions"] = tuple(values["fileExtensions"])
    return ProcessConfig.model_validate(values)


def normalize(raw: Any, sink: DiagnosticSink | None = None) -> ConfigSet:
    """Fill and correct raw process entries against :data:`DEFAULT_PROCESS_CONFIG`.

    Missing fields take the default value silently. Fields whose type does not
    match the default's are reported to ``sink`` once each and replaced by the
    default. Entries are never dropped or reordered, and this never raises.
    """
    report = log_diagnostic if sink is None else sink
    if raw is None:
        return (DEFAULT_PROCESS_CONFIG,)
    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Sequence):
        report(config_type_mismatch(None))
        return (DEFAULT_PROCESS_CONFIG,)

    config_set = tuple(_normalize_entry(index, entry, report) for index, entry in enumerate(raw))
    LOGGER.debug("Loaded %d ctags process entr%s", len(config_set), "y" if len(config_set) == 1 else "ies")
    return config_set


__all__ = ["ConfigSet", "DEFAULT_PROCESS_CONFIG", "ProcessConfig", "ToolConfig", "normalize"]
