"""Domain models for explain-me.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and live only for the duration of one invocation.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Mode(enum.Enum):
    """What a single invocation is asked to do."""

    SINGLE_FILE = "single-file"
    DIRECTORY = "directory"
    CHAT = "chat"


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    """Resolved command-line request.

    Any combination of instruction flags is accepted; the prompt builder
    applies them by priority (custom prompt, bug check, summary, explain).
    """

    mode: Mode | None
    """Requested mode, or ``None`` when no mode flag was given."""

    target_path: str | None = None
    """File (``-f``) or directory (``-d``) argument."""

    custom_prompt: str | None = None
    """Instruction text from ``--prompt``."""

    summary: bool = False
    bug_check: bool = False


# ---------------------------------------------------------------------------
# Inference
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InferenceResult:
    """Captured output of one synchronous inference run."""

    stdout: str
    stderr: str
    exit_status: int

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0


@dataclass(frozen=True, slots=True)
class Explanation:
    """Model answer for one source file."""

    source_name: str
    """Display name of the analyzed source (the file's base name)."""

    answer: str | None
    """Extracted answer, or ``None`` when extraction found nothing."""

    raw_output: str
    """Everything the binary printed on stdout."""

    @property
    def text(self) -> str:
        """The answer when one was extracted, else the raw output."""
        if self.answer is not None:
            return self.answer
        return self.raw_output
