"""Reading tjs.ctagsProcess from the settings file."""

from __future__ import annotations

from pathlib import Path

import pytest

from tjsctags.settings import SettingsError, read_process_settings, resolve_settings_file


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_file_is_absent(tmp_path: Path) -> None:
    assert read_process_settings(tmp_path / "nope.yaml") is None
    assert read_process_settings(None) is None


def test_namespaced_key(tmp_path: Path) -> None:
    settings = _write(
        tmp_path / "tjs-ctags.yaml",
        "tjs:\n  ctagsProcess:\n    - tagFilePath: out.tags\n      fileExtensions: [.tjs, .foo]\n",
    )
    assert read_process_settings(settings) == [{"tagFilePath": "out.tags", "fileExtensions": [".tjs", ".foo"]}]


def test_flat_key(tmp_path: Path) -> None:
    settings = _write(tmp_path / "tjs-ctags.yaml", '"tjs.ctagsProcess":\n  - runOnSave: true\n')
    assert read_process_settings(settings) == [{"runOnSave": True}]


def test_namespace_without_property_is_absent(tmp_path: Path) -> None:
    settings = _write(tmp_path / "tjs-ctags.yaml", "tjs:\n  somethingElse: 1\n")
    assert read_process_settings(settings) is None


def test_empty_file_is_absent(tmp_path: Path) -> None:
    assert read_process_settings(_write(tmp_path / "tjs-ctags.yaml", "")) is None


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    settings = _write(tmp_path / "tjs-ctags.yaml", "tjs: [unclosed\n")
    with pytest.raises(SettingsError, match="Failed to parse"):
        read_process_settings(settings)


def test_non_mapping_document_raises(tmp_path: Path) -> None:
    settings = _write(tmp_path / "tjs-ctags.yaml", "- just\n- a list\n")
    with pytest.raises(SettingsError, match="must contain a mapping"):
        read_process_settings(settings)


def test_resolve_settings_file(tmp_path: Path) -> None:
    assert resolve_settings_file(None) is None
    assert resolve_settings_file(tmp_path) == tmp_path / "tjs-ctags.yaml"
    assert resolve_settings_file(tmp_path, tmp_path / "other.yaml") == tmp_path / "other.yaml"
