"""``llama-cli`` backed implementation of :class:`~explain_me.core.protocols.InferenceRunner`.

This module is the **only** place in the codebase that spawns the
inference binary.  Launch failures (``OSError`` from :mod:`subprocess`)
are caught here and re-raised as
:class:`~explain_me.exceptions.SubprocessStartupError`.
"""

from __future__ import annotations

import logging
import subprocess
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import BinaryIO

from explain_me.core.models import InferenceResult
from explain_me.exceptions import SubprocessStartupError

logger = logging.getLogger(__name__)

_RELAY_CHUNK_SIZE = 4096
_RELAY_JOIN_TIMEOUT = 5.0


def _describe_args(args: Sequence[str]) -> list[str]:
    """Return *args* with the prompt value replaced by its length."""
    described: list[str] = []
    redact_next = False
    for arg in args:
        if redact_next:
            described.append(f"<prompt: {len(arg)} chars>")
            redact_next = False
            continue
        described.append(arg)
        redact_next = arg == "-p"
    return described


class LlamaCliRunner:
    """Concrete :class:`InferenceRunner` backed by a ``llama-cli`` executable.

    Usage::

        runner = LlamaCliRunner(Path("/opt/homebrew/bin/llama-cli"))
        result = runner.run_once(["-m", "model.gguf", "-p", prompt])

    This class satisfies the :class:`~explain_me.core.protocols.InferenceRunner`
    protocol structurally, without explicit inheritance.
    """

    def __init__(self, binary: Path | str) -> None:
        self._binary: str = str(binary)

    @property
    def binary(self) -> str:
        return self._binary

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def run_once(self, args: Sequence[str]) -> InferenceResult:
        """Run ``llama-cli`` to completion, capturing stdout and stderr.

        There is no timeout; a hung binary blocks the caller.

        Raises
        ------
        SubprocessStartupError
            When the binary is missing or cannot be executed.
        """
        command = [self._binary, *args]
        logger.debug("Running %s", _describe_args(command))
        try:
            completed = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise SubprocessStartupError(
                f"Failed to start llama-cli: {exc}",
                hint=f"Check that {self._binary} exists and is executable.",
            ) from exc

        logger.debug("llama-cli exited with status %d", completed.returncode)
        return InferenceResult(
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            exit_status=completed.returncode,
        )

    def run_interactive(
        self,
        args: Sequence[str],
        *,
        output: BinaryIO,
    ) -> LlamaCliSession:
        """Start ``llama-cli`` as a persistent session relaying to *output*.

        stderr is inherited so the binary's diagnostics reach the
        terminal unchanged.

        Raises
        ------
        SubprocessStartupError
            When the binary is missing or cannot be executed.
        """
        command = [self._binary, *args]
        logger.debug("Starting interactive %s", command)
        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
            )
        except OSError as exc:
            raise SubprocessStartupError(
                f"Failed to start llama-cli: {exc}",
                hint=f"Check that {self._binary} exists and is executable.",
            ) from exc
        return LlamaCliSession(process, output)


class LlamaCliSession:
    """A running interactive ``llama-cli`` process.

    A daemon thread copies the process's stdout to the output stream
    chunk by chunk.  The main thread only writes to the process's stdin,
    so the two never touch the same stream.
    """

    def __init__(self, process: subprocess.Popen[bytes], output: BinaryIO) -> None:
        self._process = process
        self._output = output
        self._closed = False
        self._relay = threading.Thread(
            target=self._relay_output,
            name="llama-cli-relay",
            daemon=True,
        )
        self._relay.start()

    def _relay_output(self) -> None:
        stream = self._process.stdout
        if stream is None:
            return
        try:
            while True:
                chunk = stream.read1(_RELAY_CHUNK_SIZE)
                if not chunk:
                    break
                self._output.write(chunk)
                self._output.flush()
        except (OSError, ValueError):
            # Stream closed underneath us during shutdown.
            logger.debug("Output relay stopped", exc_info=True)

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def send(self, line: str) -> bool:
        """Write *line* and a newline to the process's stdin."""
        stdin = self._process.stdin
        if self._closed or stdin is None:
            return False
        try:
            stdin.write(f"{line}\n".encode("utf-8"))
            stdin.flush()
        except (BrokenPipeError, OSError, ValueError):
            logger.debug("llama-cli stopped accepting input")
            return False
        return True

    def is_running(self) -> bool:
        return self._process.poll() is None

    def exit_status(self) -> int | None:
        return self._process.poll()

    def terminate(self) -> None:
        """Kill the process, wait for it and stop the relay (idempotent)."""
        if self._closed:
            return
        self._closed = True

        if self._process.poll() is None:
            self._process.kill()
        self._process.wait()
        self._relay.join(timeout=_RELAY_JOIN_TIMEOUT)

        for stream in (self._process.stdin, self._process.stdout):
            if stream is None:
                continue
            try:
                stream.close()
            except OSError:
                pass
