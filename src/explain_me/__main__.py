"""Allow ``python -m explain_me`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m explain_me`` behaves identically to the ``explain-me``
console script.
"""

from __future__ import annotations

from explain_me.cli.app import cli

if __name__ == "__main__":
    cli()
