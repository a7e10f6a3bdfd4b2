"""Rich spinner shown while a one-shot inference is running.

``llama-cli`` gives no progress information and may run for a long
time, so the CLI shows an indeterminate spinner around each blocking
run.

Design
------
* :class:`AnalysisSpinner` wraps a Rich :class:`~rich.status.Status`.
* Without Rich the description is printed once to stderr instead.
* Shutdown-safe: :meth:`stop` is idempotent.
"""

from __future__ import annotations

import sys
from typing import Any

from explain_me.cli.console import escape_markup, get_rich_console
from explain_me.exceptions import MissingDependencyError


class AnalysisSpinner:
    """Context manager displaying *description* with a spinner.

    Usage::

        with AnalysisSpinner("Analyzing main.py..."):
            explanation = service.explain(...)
    """

    def __init__(self, description: str) -> None:
        self._description = description
        self._status: Any = None
        self._started: bool = False
        try:
            rich_console = get_rich_console()
        except MissingDependencyError:
            return
        self._status = rich_console.status(
            f"[bold blue]{escape_markup(description)}",
            spinner="dots",
        )

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> AnalysisSpinner:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the spinner."""
        if self._started:
            return
        self._started = True
        if self._status is None:
            print(self._description, file=sys.stderr)
            return
        self._status.start()

    def stop(self) -> None:
        """Stop the spinner (idempotent)."""
        if not self._started:
            return
        self._started = False
        if self._status is not None:
            self._status.stop()
