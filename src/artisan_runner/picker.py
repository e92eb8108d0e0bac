"""Interactive task selection.

A questionary checkbox lists ``[Run ALL]`` followed by the catalog, with
the last saved selection pre-checked. When stdin is not a terminal a
plain numeric prompt is used instead.
"""

import sys

import questionary

from .catalog import RUN_ALL_LABEL, TASKS, Task, all_positions, position_of, task_at
from .errors import PickerError, SelectionError
from .logging import get_logger
from .selection import parse_numbers

logger = get_logger("picker")

PROMPT_MESSAGE = "Select Artisan commands (space to toggle, enter to run):"


def build_options(tasks: tuple[Task, ...] = TASKS) -> list[str]:
    return [RUN_ALL_LABEL, *(t.label for t in tasks)]


def default_picks(last: list[int] | None, tasks: tuple[Task, ...] = TASKS) -> list[str]:
    """Labels to pre-check given the previous selection.

    A previous selection as long as the catalog pre-checks only
    ``[Run ALL]``. Otherwise each in-range position pre-checks its task;
    positions that no longer exist are ignored.
    """
    if not last:
        return []
    if len(last) == len(tasks):
        return [RUN_ALL_LABEL]
    picks = []
    for position in last:
        task = task_at(position, tasks)
        if task is not None:
            picks.append(task.label)
    return picks


def translate_picks(picks: list[str], tasks: tuple[Task, ...] = TASKS) -> list[int]:
    """Map chosen labels back to 1-based positions."""
    if RUN_ALL_LABEL in picks:
        return all_positions(len(tasks))
    positions = []
    for label in picks:
        position = position_of(label, tasks)
        if position is not None:
            positions.append(position)
    return positions


def _require_one(picks: list[str]) -> bool | str:
    return True if picks else "Select at least one command."


def pick_interactive(tasks: tuple[Task, ...] = TASKS, last: list[int] | None = None) -> list[int]:
    """Show the checkbox prompt and return the chosen positions.

    Raises:
        PickerError: The prompt was cancelled.
    """
    checked = set(default_picks(last, tasks))
    choices = [
        questionary.Choice(title=label, value=label, checked=label in checked)
        for label in build_options(tasks)
    ]
    picks = questionary.checkbox(PROMPT_MESSAGE, choices=choices, validate=_require_one).ask()
    if picks is None:
        raise PickerError("selection cancelled")
    logger.debug("Picked", picks=picks)
    return translate_picks(picks, tasks)


def prompt_numbers(tasks: tuple[Task, ...] = TASKS) -> list[int]:
    """Line-based fallback: list the catalog and read a ``--numbers`` string.

    Raises:
        PickerError: Input ended or could not be parsed.
    """
    print("Available commands:")
    for position, task in enumerate(tasks, start=1):
        print(f"  {position}. {task.label}")
    try:
        text = input("Select by number (comma-separated, 0 for all): ")
    except EOFError as e:
        raise PickerError("no input received") from e
    try:
        return parse_numbers(text.strip(), len(tasks))
    except SelectionError as e:
        raise PickerError(str(e)) from e


def pick_tasks(tasks: tuple[Task, ...] = TASKS, last: list[int] | None = None) -> list[int]:
    """Pick interactively, falling back to the numeric prompt without a TTY."""
    if sys.stdin.isatty():
        return pick_interactive(tasks, last)
    logger.debug("stdin is not a TTY, using numeric prompt")
    return prompt_numbers(tasks)
