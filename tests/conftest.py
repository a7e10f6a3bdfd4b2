"""Shared pytest fixtures and configuration for the explain-me test suite.

Guidelines
----------
* No real model and no real ``llama-cli`` in any test.
* The inference runner is mocked at the infra boundary; runner tests
  that need a process use a tiny Python script as the fake binary.
* Core tests must be pure, without side effects.
* Environments are passed explicitly, never read from the host.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from explain_me.config import Settings
from explain_me.core.models import InferenceResult

MODEL = "/models/codellama.gguf"

CANNED_OUTPUT = (
    "[INST] Explain what this code does:\n\nprint('hi')\n\n[/INST] "
    "The answer is 42.\n> EOF\nignored"
)


@pytest.fixture
def settings() -> Settings:
    return Settings(model_path=MODEL)


@pytest.fixture
def environ() -> dict[str, str]:
    return {"MODEL_PATH": MODEL}


@pytest.fixture
def runner() -> MagicMock:
    """Inference runner double answering every prompt with CANNED_OUTPUT."""
    mock = MagicMock()
    mock.run_once.return_value = InferenceResult(
        stdout=CANNED_OUTPUT,
        stderr="",
        exit_status=0,
    )
    return mock
