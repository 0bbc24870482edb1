"""Shape of the generated ctags command line."""

from __future__ import annotations

import os

from tjsctags.command import TAG_RULES, build_command
from tjsctags.config import ProcessConfig

EXPECTED_REGEXES = (
    '--regex-tjs="/^[ \\t]*class[ \\t]+([a-zA-Z0-9_]+)/\\1/c,class/"'
    ' --regex-tjs="/^[ \\t]*function[ \\t]+([a-zA-Z0-9_]+)/\\1/f,function/"'
    ' --regex-tjs="/^[ \\t]*property[ \\t]+([a-zA-Z0-9_]+)/\\1/p,property/"'
    ' --regex-tjs="/^[ \\t]*var[ \\t]+([a-zA-Z0-9_]+)/\\1/v,value/"'
    ' --regex-tjs="/^[ \\t]*const[ \\t]+([a-zA-Z0-9_]+)/\\1/v,value/"'
    ' --regex-tjs="/^[ \\t]*([a-zA-Z0-9_]+)[ \\t]*:[ \\t]*function/\\1/f,function/"'
    ' --regex-tjs="/([a-zA-Z0-9_]+)[ \\t]*=[ \\t]*function/\\1/f,function/"'
)


def _config(**overrides: object) -> ProcessConfig:
    values: dict[str, object] = {
        "tagFilePath": "out.tags",
        "searchPath": "src",
        "searchRecursive": True,
        "fileExtensions": (".tjs", ".foo"),
    }
    values.update(overrides)
    return ProcessConfig.model_validate(values)


def test_full_command_line() -> None:
    command = build_command(_config(extraOption="--sort=no"), "/proj", sep="/")
    assert command == (
        "ctags --langdef=tjs --langmap=tjs:.tjs,.foo "
        + EXPECTED_REGEXES
        + ' --sort=no -f "/proj/out.tags" -R "/proj/src*"'
    )


def test_platform_separator_by_default() -> None:
    command = build_command(_config(), "/proj")
    assert f'-f "/proj{os.sep}out.tags"' in command
    assert command.endswith(f'"/proj{os.sep}src*"')


def test_non_recursive_omits_flag() -> None:
    command = build_command(_config(searchRecursive=False), "/proj", sep="/")
    assert " -R " not in command
    assert command.endswith('-f "/proj/out.tags" "/proj/src*"')


def test_empty_search_path_scans_root() -> None:
    command = build_command(_config(searchPath=""), "/proj", sep="/")
    assert command.endswith('-R "/proj/*"')


def test_windows_separator() -> None:
    command = build_command(_config(), "C:\\work", sep="\\")
    assert '-f "C:\\work\\out.tags"' in command
    assert command.endswith('"C:\\work\\src*"')


def test_rules_capture_identifier() -> None:
    assert len(TAG_RULES) == 7
    for rule in TAG_RULES:
        assert "([a-zA-Z0-9_]+)" in rule
        assert "/\\1/" in rule
