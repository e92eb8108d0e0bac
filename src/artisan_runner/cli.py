"""CLI entry point and run orchestration for artisan-runner."""

import argparse
import sys
from uuid import uuid4

import structlog

from . import __version__
from .catalog import MARKER_FILE, TASKS
from .config import RunnerConfig, SavePolicy, build_config
from .console import Console
from .errors import (
    FatalError,
    PreferenceError,
    PreferenceMissingError,
    RunnerError,
)
from .executor import RunSummary, run_selection
from .logging import get_logger, setup_logging
from .picker import pick_tasks
from .preferences import PreferenceStore
from .selection import parse_numbers

logger = get_logger("cli")


# === Selection Sources ===


def _open_store(config: RunnerConfig) -> PreferenceStore | None:
    """Return the preference store, or None when no path is resolvable."""
    try:
        return PreferenceStore(config.config_path)
    except PreferenceError as e:
        logger.warning("Preference file unavailable", reason=str(e))
        return None


def _load_last(store: PreferenceStore | None) -> list[int]:
    if store is None:
        raise FatalError("no last selections saved")
    try:
        last = store.load()
    except PreferenceMissingError:
        raise FatalError("no last selections saved") from None
    except PreferenceError as e:
        raise FatalError(f"could not load last selections: {e}") from e
    if not last:
        raise FatalError("no last selections saved")
    return last


def resolve_selection(config: RunnerConfig, store: PreferenceStore | None) -> list[int]:
    """Pick the selection source: --numbers, then --use-last, then the picker."""
    if config.numbers:
        logger.debug("Selection from --numbers", numbers=config.numbers)
        return parse_numbers(config.numbers, len(TASKS))

    if config.use_last:
        logger.debug("Selection from saved preference")
        return _load_last(store)

    last = store.load_or_none() if store is not None else None
    return pick_tasks(TASKS, last)


def persist_selection(
    selection: list[int],
    config: RunnerConfig,
    store: PreferenceStore | None,
    console: Console,
) -> None:
    """Save the selection according to ``config.save_policy``."""
    if config.save_policy is SavePolicy.SKIP:
        return
    if store is None:
        console.warn("Could not save selection: no config or home directory")
        return
    try:
        store.save(selection)
    except PreferenceError as e:
        console.warn(f"Could not save selection: {e}")


# === Run ===


def run(config: RunnerConfig, console: Console) -> int:
    """Execute one launcher run and return the process exit code."""
    project_path = config.project_path
    console.info(f"Project path: {project_path}")

    if not (project_path / MARKER_FILE).exists():
        console.warn(
            f"{MARKER_FILE} not found in the given path. "
            "If it lives elsewhere, commands may still work if PHP resolves it."
        )

    store = _open_store(config)
    selection = resolve_selection(config, store)
    if not selection:
        raise FatalError("no commands selected")

    persist_selection(selection, config, store, console)

    summary: RunSummary = run_selection(selection, project_path, console, TASKS)
    console.ok("All selected commands executed.")

    if config.strict and not summary.ok:
        console.error(f"{len(summary.failed)} of {len(summary.results)} commands failed")
        return 1
    return 0


# === Main ===


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="artisan-runner",
        description="artisan-runner: pick and run Laravel artisan maintenance commands",
    )
    parser.add_argument(
        "--path",
        type=str,
        default=".",
        help="Path to the Laravel project (where artisan lives)",
    )
    parser.add_argument(
        "--use-last",
        action="store_true",
        help="Run the last selections without prompting",
    )
    parser.add_argument(
        "--numbers",
        type=str,
        default="",
        help="Comma-separated indices to run (1-based). Use 0 for all. Example: --numbers 1,3",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--no-save", action="store_true", help="Do not remember this selection")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Preference file path (default: per-user config dir, or $ARTISAN_RUNNER_CONFIG)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any selected command fails",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["debug", "info", "warning", "error"],
        help="Diagnostic log level (default: warning)",
    )
    parser.add_argument("--log-json", action="store_true", help="Output diagnostics as JSON lines")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console(color=not args.no_color)

    try:
        config = build_config(args)
    except (OSError, RuntimeError) as e:
        console.error(f"unable to resolve path: {e}")
        return 1

    setup_logging(level=config.log_level, json_output=config.log_json, colors=config.color)
    structlog.contextvars.bind_contextvars(run_id=uuid4().hex[:8])

    try:
        return run(config, console)
    except RunnerError as e:
        console.error(str(e))
        return 1
    except KeyboardInterrupt:
        console.warn("Interrupted")
        return 130
    finally:
        structlog.contextvars.clear_contextvars()


if __name__ == "__main__":
    sys.exit(main())
