"""Persistence of the last-used selection.

One JSON record per user profile, overwritten on every save::

    {
      "last_selections": [1, 3],
      "saved_at": "2024-05-01T12:30:00+02:00"
    }
"""

import json
import os
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path

import platformdirs

from .errors import PreferenceError, PreferenceMissingError
from .logging import get_logger

logger = get_logger("preferences")

# === Constants ===

CONFIG_FILE_NAME = "artisan-runner.json"
HOME_FALLBACK_NAME = ".artisan-runner.json"
CONFIG_ENV_VAR = "ARTISAN_RUNNER_CONFIG"

FILE_MODE = 0o600
DIR_MODE = 0o755


# === Path Resolution ===


def get_config_path() -> Path:
    """Resolve the preference file path.

    Order: ``$ARTISAN_RUNNER_CONFIG``, the platform per-user config
    directory, then a dotfile in the home directory.

    Raises:
        PreferenceError: Neither a config dir nor a home dir is resolvable.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()

    try:
        config_dir = platformdirs.user_config_dir()
    except (OSError, KeyError, RuntimeError):
        config_dir = ""
    if config_dir:
        return Path(config_dir) / CONFIG_FILE_NAME

    try:
        home = Path.home()
    except (OSError, KeyError, RuntimeError) as e:
        raise PreferenceError(f"unable to resolve a config or home directory: {e}") from e
    return home / HOME_FALLBACK_NAME


# === Record ===


@dataclass
class PreferenceRecord:
    """Last-used selection and when it was saved."""

    last_selections: list[int]
    saved_at: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: object) -> "PreferenceRecord":
        if not isinstance(data, dict):
            raise PreferenceError("preference file is not a JSON object")
        selections = data.get("last_selections") or []
        if not isinstance(selections, list) or not all(
            isinstance(i, int) and not isinstance(i, bool) for i in selections
        ):
            raise PreferenceError("last_selections must be a list of integers")
        return cls(last_selections=selections, saved_at=str(data.get("saved_at", "")))


def _now_rfc3339() -> str:
    return datetime.now().astimezone().isoformat(timespec="seconds")


# === Store ===


class PreferenceStore:
    """Reads and writes the preference record at a fixed path."""

    def __init__(self, path: Path | None = None):
        self.path = path if path is not None else get_config_path()

    def save(self, indices: list[int]) -> PreferenceRecord:
        """Overwrite the record with ``indices`` and the current time.

        Raises:
            PreferenceError: The file could not be written.
        """
        record = PreferenceRecord(last_selections=list(indices), saved_at=_now_rfc3339())
        payload = json.dumps(record.to_dict(), indent=2)
        try:
            self.path.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            # O_CREAT mode is ignored for an existing file
            os.chmod(self.path, FILE_MODE)
        except OSError as e:
            raise PreferenceError(f"unable to write {self.path}: {e}") from e

        logger.debug("Saved selection", path=str(self.path), selections=record.last_selections)
        return record

    def load_record(self) -> PreferenceRecord:
        """Read and validate the full record.

        Raises:
            PreferenceMissingError: No file has been saved yet.
            PreferenceError: The file is unreadable or malformed.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise PreferenceMissingError(f"no saved selection at {self.path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise PreferenceError(f"unable to read {self.path}: {e}") from e

        try:
            data = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as e:
            raise PreferenceError(f"malformed preference file {self.path}: {e}") from e

        record = PreferenceRecord.from_dict(data)
        logger.debug("Loaded selection", path=str(self.path), saved_at=record.saved_at)
        return record

    def load(self) -> list[int]:
        """Return the saved ``last_selections`` list."""
        return self.load_record().last_selections

    def load_or_none(self) -> list[int] | None:
        """Like ``load`` but treats any failure as "no prior preference"."""
        try:
            return self.load()
        except PreferenceError as e:
            logger.debug("No usable preference", reason=str(e))
            return None
