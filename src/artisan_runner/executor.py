"""Sequential execution of selected catalog tasks.

Children inherit stdout/stderr so their output streams live. A failing
task is reported and the next one still runs.
"""

import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from .catalog import TASKS, Task, task_at
from .console import Console
from .logging import get_logger

logger = get_logger("executor")


@dataclass
class TaskResult:
    """Outcome of one task run."""

    task: Task
    success: bool
    returncode: int | None = None
    error: str | None = None


@dataclass
class RunSummary:
    """Outcome of a whole selection."""

    results: list[TaskResult] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)

    @property
    def failed(self) -> list[TaskResult]:
        return [r for r in self.results if not r.success]

    @property
    def ok(self) -> bool:
        return not self.failed


def run_task(task: Task, cwd: Path) -> TaskResult:
    """Run one task in ``cwd`` and wait for it to exit."""
    try:
        # No capture: output goes straight to the terminal
        result = subprocess.run(list(task.argv), cwd=cwd, check=False)
    except OSError as e:
        logger.debug("Launch failed", argv=task.argv, error=str(e))
        return TaskResult(task=task, success=False, error=str(e))

    logger.debug("Task exited", argv=task.argv, returncode=result.returncode)
    if result.returncode != 0:
        return TaskResult(
            task=task,
            success=False,
            returncode=result.returncode,
            error=f"exit status {result.returncode}",
        )
    return TaskResult(task=task, success=True, returncode=0)


def run_selection(
    selection: list[int],
    cwd: Path,
    console: Console,
    tasks: tuple[Task, ...] = TASKS,
) -> RunSummary:
    """Run every selected position in order."""
    summary = RunSummary()
    console.ok("Executing selected commands...\n")

    for position in selection:
        task = task_at(position, tasks)
        if task is None:
            console.warn(f"Skipping invalid index: {position}")
            summary.skipped.append(position)
            continue

        console.step(f"Running: {task.command_line}")
        result = run_task(task, cwd)
        summary.results.append(result)
        if result.success:
            console.ok("Done\n")
        else:
            console.error(f"Error running '{task.label}': {result.error}")

    return summary
