"""Custom exception hierarchy for explain-me.

All exceptions that cross layer boundaries must inherit from
:class:`ExplainMeError`.  Raw ``OSError`` / ``subprocess`` exceptions
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Every error carries the process exit code the CLI boundary should use.

Hierarchy
---------
ExplainMeError
├── ConfigurationError
├── UsageError
├── MissingDependencyError
├── PathNotFoundError
├── FileReadError
├── SubprocessStartupError
│   └── BinaryNotFoundError
└── SubprocessExitError
"""

from __future__ import annotations

GENERAL_ERROR_CODE: int = 1


class ExplainMeError(Exception):
    """Base exception for all explain-me errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    exit_code: int = GENERAL_ERROR_CODE
    """Process exit status used when this error terminates the run."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration / arguments ---------------------------------------------

class ConfigurationError(ExplainMeError):
    """Raised when required configuration (``MODEL_PATH``) is missing."""


class UsageError(ExplainMeError):
    """Raised when the command line cannot be interpreted."""


class MissingDependencyError(ExplainMeError):
    """Raised when an optional runtime package (e.g. rich) is required but absent."""


# --- Source files ----------------------------------------------------------

class PathNotFoundError(ExplainMeError):
    """Raised when the ``-f`` / ``-d`` target does not exist."""


class FileReadError(ExplainMeError):
    """Raised when a source file exists but cannot be read."""


# --- External binary -------------------------------------------------------

class SubprocessStartupError(ExplainMeError):
    """Raised when the inference binary cannot be launched at all."""


class BinaryNotFoundError(SubprocessStartupError):
    """Raised when ``llama-cli`` cannot be located."""


class SubprocessExitError(ExplainMeError):
    """Raised when the inference binary ran but exited non-zero.

    The process exit code mirrors the child's own status.
    """

    def __init__(
        self,
        message: str,
        *,
        exit_status: int,
        stderr: str = "",
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.exit_status: int = exit_status
        self.stderr: str = stderr
        # Signals report negative statuses; the shell cannot carry those.
        self.exit_code = exit_status if exit_status > 0 else GENERAL_ERROR_CODE
