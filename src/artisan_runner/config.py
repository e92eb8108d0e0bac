"""Run configuration for artisan-runner.

Built from CLI arguments only; the preference file is the single piece
of persisted state.
"""

import argparse
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class SavePolicy(str, Enum):
    """What to do with the resolved selection after a run starts."""

    WARN = "warn"  # Save; report a failed write as a warning
    SKIP = "skip"  # Do not save (--no-save)


@dataclass
class RunnerConfig:
    """Runner configuration"""

    project_path: Path = Path(".")
    use_last: bool = False
    numbers: str = ""  # Empty = not given
    color: bool = True
    save_policy: SavePolicy = SavePolicy.WARN
    strict: bool = False  # Exit 1 if any task failed
    log_level: str = "warning"
    log_json: bool = False
    config_path: Path | None = None  # None = resolve per-user path

    def __post_init__(self):
        """Resolve project_path to an absolute path."""
        self.project_path = Path(self.project_path).expanduser().resolve()


def build_config(args: argparse.Namespace) -> RunnerConfig:
    """Build RunnerConfig from parsed CLI arguments.

    Raises:
        OSError: The project path cannot be resolved.
    """
    config_kwargs = {}

    if getattr(args, "path", None):
        config_kwargs["project_path"] = Path(args.path)
    if getattr(args, "use_last", False):
        config_kwargs["use_last"] = True
    if getattr(args, "numbers", None):
        config_kwargs["numbers"] = args.numbers
    if getattr(args, "no_color", False):
        config_kwargs["color"] = False
    if getattr(args, "no_save", False):
        config_kwargs["save_policy"] = SavePolicy.SKIP
    if getattr(args, "strict", False):
        config_kwargs["strict"] = True
    if getattr(args, "log_level", None):
        config_kwargs["log_level"] = args.log_level
    if getattr(args, "log_json", False):
        config_kwargs["log_json"] = True
    if getattr(args, "config", None):
        config_kwargs["config_path"] = Path(args.config).expanduser()

    return RunnerConfig(**config_kwargs)
