"""Command-line interface for tjs-ctags."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import orjson
import typer

from .config import ToolConfig
from .diagnostics import DiagnosticCollector
from .logging import configure_logging, get_logger
from .provider import TagIndexProvider
from .runner import Trigger, plan, wait_all
from .settings import SettingsError
from .watch import watch as watch_workspace

app = typer.Typer(help="Generate ctags files for TJS projects.")
LOGGER = get_logger(__name__)

WORKSPACE_ENVVAR = "TJS_CTAGS_WORKSPACE"

WorkspaceOption = Annotated[
    Optional[Path],
    typer.Option(
        envvar=WORKSPACE_ENVVAR,
        exists=True,
        dir_okay=True,
        file_okay=False,
        help="Workspace root; tag files and search paths are relative to it.",
    ),
]
SettingsOption = Annotated[
    Optional[Path],
    typer.Option(dir_okay=False, help="Settings file holding tjs.ctagsProcess (default: <workspace>/tjs-ctags.yaml)."),
]
LogLevelOption = Annotated[str, typer.Option(help="Log level.")]


@app.callback()
def main() -> None:
    """tjs-ctags CLI root."""
    return None


def _make_provider(config: ToolConfig, diagnostics: DiagnosticCollector) -> TagIndexProvider:
    workspace = config.workspace.resolve() if config.workspace is not None else None
    try:
        return TagIndexProvider(workspace, settings_file=config.settings_file, sink=diagnostics)
    except SettingsError as error:
        raise typer.BadParameter(str(error)) from error


def _finish(diagnostics: DiagnosticCollector) -> None:
    if len(diagnostics):
        raise typer.Exit(code=1)


@app.command("update")
def update(
    workspace: WorkspaceOption = None,
    settings: SettingsOption = None,
    wait: bool = typer.Option(True, help="Wait for the ctags processes to finish."),
    log_level: LogLevelOption = "INFO",
) -> None:
    """Regenerate every configured tag file."""
    config = ToolConfig(workspace=workspace, settings_file=settings, wait=wait, log_level=log_level)
    configure_logging(config.log_level)
    diagnostics = DiagnosticCollector()
    provider = _make_provider(config, diagnostics)

    jobs = provider.update_ctags(Trigger.MANUAL)
    LOGGER.info("Started %d ctags process%s", len(jobs), "" if len(jobs) == 1 else "es")
    if config.wait:
        wait_all(jobs)
    _finish(diagnostics)


@app.command("saved")
def saved(
    file: Path = typer.Argument(..., help="File that was just saved."),
    language_id: Optional[str] = typer.Option(None, help="Language id of the saved file (default: from its extension)."),
    workspace: WorkspaceOption = None,
    settings: SettingsOption = None,
    wait: bool = typer.Option(True, help="Wait for the ctags processes to finish."),
    log_level: LogLevelOption = "INFO",
) -> None:
    """Run the entries marked runOnSave after a file was saved."""
    config = ToolConfig(workspace=workspace, settings_file=settings, wait=wait, log_level=log_level)
    configure_logging(config.log_level)
    diagnostics = DiagnosticCollector()
    provider = _make_provider(config, diagnostics)

    resolved_language = language_id if language_id is not None else provider.language_id_for(file)
    jobs = provider.on_did_save(resolved_language)
    if not jobs:
        LOGGER.debug("No ctags process runs on save of %s", file)
    if config.wait:
        wait_all(jobs)
    _finish(diagnostics)


@app.command("watch")
def watch(
    workspace: WorkspaceOption = None,
    settings: SettingsOption = None,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Watch the workspace and run ctags whenever a TJS file is saved."""
    config = ToolConfig(workspace=workspace, settings_file=settings, log_level=log_level)
    configure_logging(config.log_level)
    diagnostics = DiagnosticCollector()
    provider = _make_provider(config, diagnostics)
    if provider.workspace_root is None:
        raise typer.BadParameter("--workspace is required to watch", param_hint="--workspace")
    watch_workspace(provider)


@app.command("commands")
def commands(
    workspace: WorkspaceOption = None,
    settings: SettingsOption = None,
    on_save: bool = typer.Option(False, "--on-save", help="Plan as if triggered by a save."),
    as_json: bool = typer.Option(False, "--json", help="Print the commands as JSON."),
    log_level: LogLevelOption = "INFO",
) -> None:
    """Print the ctags command lines without running them."""
    config = ToolConfig(workspace=workspace, settings_file=settings, log_level=log_level)
    configure_logging(config.log_level)
    diagnostics = DiagnosticCollector()
    provider = _make_provider(config, diagnostics)

    trigger = Trigger.ON_SAVE if on_save else Trigger.MANUAL
    planned = plan(provider.config_set, trigger, provider.workspace_root, sink=diagnostics)
    if as_json:
        payload = [{"index": item.index, "command": item.command} for item in planned]
        typer.echo(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8"))
    else:
        for item in planned:
            typer.echo(item.command)
    _finish(diagnostics)
