"""Core explain service — one prompt, one inference run, one answer.

This service delegates the actual inference to an
:class:`~explain_me.core.protocols.InferenceRunner` injected at
construction time.  It is responsible for:

* Building the prompt and the one-shot ``llama-cli`` argument list.
* Turning a non-zero exit into :class:`SubprocessExitError`.
* Extracting the answer from the raw output.

Guarantees
----------
* Pure orchestration: no ``print()`` and no filesystem access.
* Only :class:`~explain_me.exceptions.ExplainMeError` subclasses escape.
"""

from __future__ import annotations

import logging

from explain_me.config import Settings
from explain_me.core.models import Explanation, RequestDescriptor
from explain_me.core.prompt_builder import prompt_for
from explain_me.core.protocols import InferenceRunner
from explain_me.core.response_parser import parse_response
from explain_me.exceptions import (
    ExplainMeError,
    SubprocessExitError,
    SubprocessStartupError,
)

logger = logging.getLogger(__name__)


class ExplainService:
    """Stateless service that explains source text with the model.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`InferenceRunner` protocol.
    settings:
        Model path and generation limits.
    """

    def __init__(self, runner: InferenceRunner, settings: Settings) -> None:
        self._runner: InferenceRunner = runner
        self._settings: Settings = settings

    # ------------------------------------------------------------------
    # Argument construction (pure)
    # ------------------------------------------------------------------

    def build_args(self, prompt: str) -> list[str]:
        """Return the one-shot ``llama-cli`` arguments for *prompt*."""
        return [
            "-m", self._settings.model_path,
            "-p", prompt,
            "-ngl", str(self._settings.gpu_layers),
            "-n", str(self._settings.max_tokens),
        ]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def explain(
        self,
        source_name: str,
        code: str,
        request: RequestDescriptor,
    ) -> Explanation:
        """Explain *code* according to the instruction flags in *request*.

        Raises
        ------
        SubprocessStartupError
            When the binary cannot be launched.
        SubprocessExitError
            When the binary exits with a non-zero status.
        """
        prompt = prompt_for(code, request)
        logger.debug("Explaining %s (%d characters of code)", source_name, len(code))

        try:
            result = self._runner.run_once(self.build_args(prompt))
        except ExplainMeError:
            raise
        except Exception as exc:
            raise SubprocessStartupError(
                f"Unexpected error running llama-cli: {exc}",
            ) from exc

        if not result.succeeded:
            raise SubprocessExitError(
                f"llama-cli exited with status {result.exit_status}",
                exit_status=result.exit_status,
                stderr=result.stderr,
            )

        answer = parse_response(result.stdout)
        if answer is None:
            logger.debug("No answer markers in output for %s; using raw output", source_name)
        return Explanation(
            source_name=source_name,
            answer=answer,
            raw_output=result.stdout,
        )
