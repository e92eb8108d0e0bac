"""Built-in catalog of Laravel maintenance commands.

Positions are 1-based at the user-facing boundary (``--numbers``, the
saved preference file). ``task_at`` is the only place that converts a
position into sequence access.
"""

from dataclasses import dataclass

# Synthetic option listed first in the picker
RUN_ALL_LABEL = "[Run ALL]"

# Entry point expected in the project root
MARKER_FILE = "artisan"


@dataclass(frozen=True)
class Task:
    """A catalog entry: display label and the argv to execute."""

    label: str
    argv: tuple[str, ...]

    @property
    def command_line(self) -> str:
        return " ".join(self.argv)


TASKS: tuple[Task, ...] = (
    Task("php artisan optimize:clear", ("php", "artisan", "optimize:clear")),
    Task("php artisan config:clear", ("php", "artisan", "config:clear")),
    Task("php artisan route:clear", ("php", "artisan", "route:clear")),
    Task("php artisan cache:clear", ("php", "artisan", "cache:clear")),
)


def all_positions(count: int) -> list[int]:
    """Return every position ``[1..count]``."""
    return list(range(1, count + 1))


def task_at(position: int, tasks: tuple[Task, ...] = TASKS) -> Task | None:
    """Return the task at a 1-based position, or None when out of range."""
    if 1 <= position <= len(tasks):
        return tasks[position - 1]
    return None


def position_of(label: str, tasks: tuple[Task, ...] = TASKS) -> int | None:
    """Return the 1-based position of the task with this label."""
    for position, task in enumerate(tasks, start=1):
        if task.label == label:
            return position
    return None
