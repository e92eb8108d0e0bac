"""
artisan-runner: pick and run Laravel artisan maintenance commands.

Usage as library:
    from artisan_runner import TASKS, parse_numbers, run_selection
    from artisan_runner import PreferenceStore

Usage as CLI:
    artisan-runner                       # Checkbox picker
    artisan-runner --numbers 1,3         # Run tasks 1 and 3
    artisan-runner --numbers 0           # Run everything
    artisan-runner --use-last            # Repeat the saved selection
"""

from importlib.metadata import PackageNotFoundError, version

from .catalog import MARKER_FILE, RUN_ALL_LABEL, TASKS, Task, all_positions, task_at
from .config import RunnerConfig, SavePolicy, build_config
from .console import Console
from .errors import (
    FatalError,
    PickerError,
    PreferenceError,
    PreferenceMissingError,
    RunnerError,
    SelectionError,
)
from .executor import RunSummary, TaskResult, run_selection, run_task
from .logging import get_logger, setup_logging
from .picker import default_picks, pick_tasks, translate_picks
from .preferences import PreferenceRecord, PreferenceStore, get_config_path
from .selection import dedupe, parse_numbers

try:
    __version__ = version("artisan-runner")
except PackageNotFoundError:
    __version__ = "0.0.0.dev"  # Fallback for development without install

__all__ = [
    # Catalog
    "MARKER_FILE",
    "RUN_ALL_LABEL",
    "TASKS",
    "Task",
    "all_positions",
    "task_at",
    # Selection
    "dedupe",
    "parse_numbers",
    # Preferences
    "PreferenceRecord",
    "PreferenceStore",
    "get_config_path",
    # Picker
    "default_picks",
    "pick_tasks",
    "translate_picks",
    # Executor
    "RunSummary",
    "TaskResult",
    "run_selection",
    "run_task",
    # Config
    "RunnerConfig",
    "SavePolicy",
    "build_config",
    # Console
    "Console",
    # Errors
    "FatalError",
    "PickerError",
    "PreferenceError",
    "PreferenceMissingError",
    "RunnerError",
    "SelectionError",
    # Logging
    "get_logger",
    "setup_logging",
]
