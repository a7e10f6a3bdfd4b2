"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so the real ``llama-cli`` can be swapped for a test
double returning canned output.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import BinaryIO, Protocol

from explain_me.core.models import InferenceResult


class InteractiveSession(Protocol):
    """Handle on a long-lived inference process.

    The process's stdout is relayed to the console by the implementation;
    callers only ever write to its stdin.
    """

    def send(self, line: str) -> bool:
        """Write *line* plus a newline to the process's stdin.

        Returns ``False`` when the process no longer accepts input.
        """
        ...  # pragma: no cover

    def is_running(self) -> bool:
        """Return whether the process is still alive."""
        ...  # pragma: no cover

    def exit_status(self) -> int | None:
        """Return the process exit status, or ``None`` while running."""
        ...  # pragma: no cover

    def terminate(self) -> None:
        """Kill the process and release its streams (idempotent)."""
        ...  # pragma: no cover


class InferenceRunner(Protocol):
    """Contract for inference-binary backends.

    Implementations must map all launch failures to
    :class:`~explain_me.exceptions.SubprocessStartupError`.
    """

    def run_once(self, args: Sequence[str]) -> InferenceResult:
        """Run the binary with *args* to completion and capture its output.

        A non-zero exit status is reported in the result, not raised.

        Raises
        ------
        SubprocessStartupError
            When the binary cannot be launched.
        """
        ...  # pragma: no cover

    def run_interactive(
        self,
        args: Sequence[str],
        *,
        output: BinaryIO,
    ) -> InteractiveSession:
        """Start the binary with *args* as a persistent session.

        Everything the process writes to stdout is copied to *output*
        as soon as it arrives.

        Raises
        ------
        SubprocessStartupError
            When the binary cannot be launched.
        """
        ...  # pragma: no cover
