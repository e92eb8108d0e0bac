"""Exception hierarchy for artisan-runner.

Raised at the failing seam, reported once by ``cli.main``.
"""


class RunnerError(Exception):
    """Base class for all artisan-runner errors."""


class SelectionError(RunnerError, ValueError):
    """A ``--numbers`` string could not be turned into a selection."""


class PreferenceError(RunnerError):
    """The preference file could not be resolved, read or written."""


class PreferenceMissingError(PreferenceError):
    """No preference file has been saved yet."""


class PickerError(RunnerError):
    """The interactive picker was cancelled or returned nothing usable."""


class FatalError(RunnerError):
    """Condition that ends the run with a failure exit code."""
