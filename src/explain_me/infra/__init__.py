"""Infrastructure layer — external system integration.

This layer wraps all interaction with the ``llama-cli`` binary and the
filesystem.  Every raw ``OSError`` must be caught here and re-raised as
an :class:`~explain_me.exceptions.ExplainMeError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from explain_me.infra.llama_cli_runner import LlamaCliRunner, LlamaCliSession
from explain_me.infra.llama_locator import LlamaCliStatus, detect_llama_cli, require_llama_cli
from explain_me.infra.source_files import list_directory_files, read_source_file

__all__: list[str] = [
    "LlamaCliRunner",
    "LlamaCliSession",
    "LlamaCliStatus",
    "detect_llama_cli",
    "list_directory_files",
    "read_source_file",
    "require_llama_cli",
]
