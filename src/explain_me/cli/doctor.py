"""``explain-me --doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment satisfies explain-me's requirements.

This module lives in the CLI layer; it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys
from pathlib import Path

from explain_me.cli import exit_codes
from explain_me.cli.console import console
from explain_me.config import Settings
from explain_me.infra.llama_locator import LlamaCliStatus, detect_llama_cli
from explain_me.version import __version__

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _llama_cli_check(llama_status: LlamaCliStatus) -> Check:
    """Return (label, value, status) for the llama-cli row."""
    if llama_status.found:
        path_str = str(llama_status.path) if llama_status.path else "found"
        return "llama-cli", path_str, "[green]OK[/green]"
    return "llama-cli", llama_status.version_hint, "[red]FAIL[/red]"


def _model_check(settings: Settings) -> Check:
    """Return (label, value, status) for the MODEL_PATH row."""
    model = Path(settings.model_path).expanduser()
    if model.is_file():
        return "model", str(model), "[green]OK[/green]"
    # llama-cli decides what it accepts; a missing file is only a warning.
    return "model", f"{model} (missing)", "[yellow]WARN[/yellow]"


def _os_check() -> Check:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    release = platform.release()
    machine = platform.machine()
    value = f"{system_display} {release} ({machine})"
    return "OS", value, "[green]OK[/green]"


def _explain_me_version_check() -> Check:
    """Return (label, value, status) for the explain-me version row."""
    return "explain-me", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\nexplain-me doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: Settings) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    llama_status = detect_llama_cli(settings.llama_cli)
    checks = [
        _explain_me_version_check(),
        _python_version_check(),
        _llama_cli_check(llama_status),
        _model_check(settings),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="explain-me doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    if not llama_status.found and llama_status.install_commands:
        lines = ["llama-cli is not installed.", "Install using one of the following commands:"]
        lines.extend(f"  {cmd}" for cmd in llama_status.install_commands)
        for line in lines:
            if rich_available:
                console.print(line)
            else:
                print(line, file=sys.stderr)

    verdict = "Some checks failed." if has_failure else "All checks passed."
    if rich_available:
        colour = "red" if has_failure else "green"
        console.print(f"[bold {colour}]{verdict}[/bold {colour}]")
    else:
        print(verdict, file=sys.stderr)

    return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS
