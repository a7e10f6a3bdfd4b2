"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.  A
failing ``llama-cli`` run is the one exception: its own status is
passed through unchanged.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — command completed (or had nothing to do)."""

GENERAL_ERROR: int = 1
"""A known ExplainMeError was caught. User-facing message was displayed."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""
