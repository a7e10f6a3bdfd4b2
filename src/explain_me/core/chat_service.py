"""Core chat service — relays user lines to a persistent model session.

The session's own output is streamed to the console by the runner;
this service only decides which lines are forwarded and when the
session ends.  The session ends when the user types ``exit`` (any case,
surrounding whitespace ignored), when input runs out, or when the
process goes away on its own.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import BinaryIO

from explain_me.config import Settings
from explain_me.core.protocols import InferenceRunner
from explain_me.exceptions import SubprocessExitError

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"


def is_exit_command(line: str) -> bool:
    """Return whether *line* asks to leave chat mode."""
    return line.strip().lower() == EXIT_COMMAND


class ChatService:
    """Drives one interactive ``llama-cli`` session.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`InferenceRunner` protocol.
    settings:
        Provides the model path.
    """

    def __init__(self, runner: InferenceRunner, settings: Settings) -> None:
        self._runner: InferenceRunner = runner
        self._settings: Settings = settings

    def build_args(self) -> list[str]:
        """Return the interactive ``llama-cli`` arguments."""
        return ["-m", self._settings.model_path, "--interactive"]

    def run(self, lines: Iterable[str], output: BinaryIO) -> None:
        """Forward *lines* to a new session until it should stop.

        The session is always terminated before returning, including
        on ``KeyboardInterrupt``.

        Raises
        ------
        SubprocessStartupError
            When the binary cannot be launched.
        SubprocessExitError
            When the process ended by itself with a non-zero status.
        """
        session = self._runner.run_interactive(self.build_args(), output=output)
        user_exit = False
        try:
            for line in lines:
                if is_exit_command(line):
                    user_exit = True
                    break
                if not session.is_running():
                    break
                if not session.send(line.strip()):
                    break
            status = None if user_exit else session.exit_status()
        finally:
            session.terminate()

        logger.debug("Chat session closed (user_exit=%s, status=%s)", user_exit, status)
        if status:
            raise SubprocessExitError(
                f"llama-cli exited with status {status}",
                exit_status=status,
            )
