"""Runtime settings resolved once at process start.

Settings are read from an explicit environment mapping and then passed
to whichever component needs them.  Nothing below the CLI layer reads
``os.environ`` directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from explain_me.exceptions import ConfigurationError

MODEL_PATH_VAR = "MODEL_PATH"
LLAMA_CLI_PATH_VAR = "LLAMA_CLI_PATH"

DEFAULT_GPU_LAYERS = 1
DEFAULT_MAX_TOKENS = 512


@dataclass(frozen=True, slots=True)
class Settings:
    """Configuration shared by the inference services."""

    model_path: str
    """Model artifact handed to ``llama-cli -m``."""

    llama_cli: str | None = None
    """Explicit ``llama-cli`` location, or ``None`` to search for it."""

    gpu_layers: int = DEFAULT_GPU_LAYERS
    """Value of ``-ngl`` for one-shot generation."""

    max_tokens: int = DEFAULT_MAX_TOKENS
    """Value of ``-n`` for one-shot generation."""


def load_settings(environ: Mapping[str, str]) -> Settings:
    """Build :class:`Settings` from *environ*.

    Raises
    ------
    ConfigurationError
        When ``MODEL_PATH`` is unset or empty.
    """
    model_path = environ.get(MODEL_PATH_VAR, "")
    if not model_path:
        raise ConfigurationError(
            f"{MODEL_PATH_VAR} environment variable is not set",
            hint=f"export {MODEL_PATH_VAR}=/path/to/model.gguf",
        )
    llama_cli = environ.get(LLAMA_CLI_PATH_VAR) or None
    return Settings(model_path=model_path, llama_cli=llama_cli)
