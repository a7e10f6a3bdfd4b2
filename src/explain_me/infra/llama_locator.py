"""Infrastructure: ``llama-cli`` detection and platform guidance.

This module is responsible for locating the inference binary and
providing platform-specific installation guidance when it is missing.

Resolution order
----------------
1. An explicit path (``LLAMA_CLI_PATH``).
2. ``llama-cli`` on the system PATH.
3. ``~/.local/bin/llama-cli``, where the bundled binary is installed.

Rules
-----
* Detection via :func:`shutil.which` and filesystem checks only, no subprocess.
* No permanent PATH modification.
* No automatic installation.
* No ``print()``; callers handle user-facing output.
"""

from __future__ import annotations

import os
import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from explain_me.exceptions import BinaryNotFoundError

BINARY_NAME = "llama-cli"


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LlamaCliStatus:
    """Result of a ``llama-cli`` detection probe.

    Attributes
    ----------
    found : bool
        Whether an executable binary was located.
    path : Path | None
        Absolute path to the binary, or ``None``.
    version_hint : str
        Human-readable status string (e.g. ``"found at …"`` or ``"not found"``).
    install_commands : tuple[str, ...]
        Suggested shell commands for installing llama.cpp on the current
        platform.  Empty when the binary is already present.
    """

    found: bool
    path: Path | None
    version_hint: str
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def local_bin_path() -> Path:
    """Return ``~/.local/bin/llama-cli``."""
    return Path.home() / ".local" / "bin" / BINARY_NAME


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def detect_llama_cli(override: str | None = None) -> LlamaCliStatus:
    """Probe for a ``llama-cli`` binary.

    Returns a :class:`LlamaCliStatus` regardless of whether the binary is
    present; the caller decides whether to abort or merely warn.  An
    explicit *override* is authoritative: no fallback search happens
    when it does not point at an executable.
    """
    if override:
        candidate = Path(override).expanduser()
        if _is_executable(candidate):
            return _found(candidate)
        return LlamaCliStatus(
            found=False,
            path=None,
            version_hint=f"not executable: {candidate}",
            install_commands=_platform_install_commands(),
        )

    on_path = shutil.which(BINARY_NAME)
    if on_path is not None:
        return _found(Path(on_path))

    bundled = local_bin_path()
    if _is_executable(bundled):
        return _found(bundled)

    return LlamaCliStatus(
        found=False,
        path=None,
        version_hint="not found",
        install_commands=_platform_install_commands(),
    )


def _found(path: Path) -> LlamaCliStatus:
    resolved = path.resolve()
    return LlamaCliStatus(
        found=True,
        path=resolved,
        version_hint=f"found at {resolved}",
        install_commands=(),
    )


def require_llama_cli(override: str | None = None) -> Path:
    """Locate ``llama-cli`` or raise :class:`BinaryNotFoundError`."""
    status = detect_llama_cli(override)
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if override:
            hint_lines.append("Point LLAMA_CLI_PATH at an executable llama-cli binary.")
        if status.install_commands:
            hint_lines.append("Install llama.cpp using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise BinaryNotFoundError(
            f"llama-cli is not available ({status.version_hint}).",
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.path


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def _platform_install_commands() -> tuple[str, ...]:
    """Return install commands appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return ("winget install llama.cpp",)
    if system == "darwin":
        return ("brew install llama.cpp",)
    if system == "linux":
        return (
            "brew install llama.cpp",
            "nix profile install nixpkgs#llama-cpp",
        )
    # Fallback: generic guidance.
    return ("Build llama.cpp from https://github.com/ggml-org/llama.cpp",)
