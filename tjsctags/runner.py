"""Decide which process entries run and launch their ctags commands."""

from __future__ import annotations

import subprocess
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Protocol, Sequence

from .command import build_command
from .config import ProcessConfig
from .diagnostics import (
    DiagnosticSink,
    empty_required_field,
    log_diagnostic,
    missing_workspace,
    process_failure,
)
from .logging import get_logger

LOGGER = get_logger(__name__)


class Trigger(str, Enum):
    MANUAL = "manual"
    ON_SAVE = "on-save"


class ProcessHandle(Protocol):
    """The part of :class:`subprocess.Popen` the runner relies on."""

    returncode: Optional[int]

    def communicate(self) -> tuple[str, str]: ...


Spawner = Callable[[str, str], ProcessHandle]


def spawn_shell(command: str, cwd: str) -> subprocess.Popen[str]:
    """Start ``command`` through the platform's default shell."""
    return subprocess.Popen(
        command,
        shell=True,
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )


@dataclass(slots=True)
class PlannedCommand:
    index: int
    command: str


@dataclass(slots=True)
class CtagsJob:
    """A launched ctags process and the thread watching it."""

    index: int
    command: str
    process: ProcessHandle
    watcher: Optional[threading.Thread] = field(default=None, repr=False)

    def wait(self, timeout: float | None = None) -> Optional[int]:
        """Block until the process finished and its outcome was reported."""
        if self.watcher is not None:
            self.watcher.join(timeout)
        return self.process.returncode


def _failure_detail(command: str, returncode: int, stderr: str) -> str:
    detail = f"Command failed with exit status {returncode}: {command}"
    stderr = (stderr or "").strip()
    if stderr:
        detail = f"{detail}\n{stderr}"
    return detail


def _watch(job: CtagsJob, sink: DiagnosticSink) -> None:
    try:
        _stdout, stderr = job.process.communicate()
    except OSError as exc:
        sink(process_failure(job.index, str(exc)))
        return
    returncode = job.process.returncode
    if returncode:
        sink(process_failure(job.index, _failure_detail(job.command, returncode, stderr)))
    else:
        LOGGER.debug("ctags process %d finished", job.index)


def plan(
    config_set: Sequence[ProcessConfig],
    trigger: Trigger,
    workspace_root: str | None,
    *,
    sink: DiagnosticSink | None = None,
) -> list[PlannedCommand]:
    """Return the commands a run would launch, reporting entries that cannot run."""
    report = log_diagnostic if sink is None else sink
    if workspace_root is None:
        report(missing_workspace())
        return []

    planned: list[PlannedCommand] = []
    for index, config in enumerate(config_set):
        if trigger is Trigger.ON_SAVE and not config.run_on_save:
            continue
        if config.tag_file_path == "":
            report(empty_required_field(index, "tagFilePath"))
            continue
        if not config.file_extensions:
            report(empty_required_field(index, "fileExtensions"))
            continue
        planned.append(PlannedCommand(index=index, command=build_command(config, workspace_root)))
    return planned


def run(
    config_set: Sequence[ProcessConfig],
    trigger: Trigger,
    workspace_root: str | None,
    *,
    sink: DiagnosticSink | None = None,
    spawn: Spawner | None = None,
) -> list[CtagsJob]:
    """Launch one ctags process per eligible entry without waiting for any of them.

    Failures to start and nonzero exits are reported to ``sink`` from a
    per-process watcher thread, so the sink must tolerate concurrent calls.
    """
    report = log_diagnostic if sink is None else sink
    launch = spawn or spawn_shell
    planned = plan(config_set, trigger, workspace_root, sink=report)
    if workspace_root is None:
        return []

    jobs: list[CtagsJob] = []
    for item in planned:
        LOGGER.debug("Running ctags for entry %d: %s", item.index, item.command)
        try:
            process = launch(item.command, workspace_root)
        except (OSError, ValueError) as exc:
            # ValueError: Popen rejects commands with embedded NUL bytes
            report(process_failure(item.index, str(exc)))
            continue
        job = CtagsJob(index=item.index, command=item.command, process=process)
        job.watcher = threading.Thread(
            target=_watch,
            args=(job, report),
            name=f"ctags-{item.index}",
            daemon=True,
        )
        job.watcher.start()
        jobs.append(job)
    return jobs


def wait_all(jobs: Sequence[CtagsJob]) -> None:
    for job in jobs:
        job.wait()


__all__ = ["CtagsJob", "PlannedCommand", "Spawner", "Trigger", "plan", "run", "spawn_shell", "wait_all"]
