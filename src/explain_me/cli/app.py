"""CLI application entry point and command routing for explain-me.

This module is the **sole error boundary** for the entire application.
It catches :class:`~explain_me.exceptions.ExplainMeError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — prompt building, inference and
  response parsing are delegated to the core and infrastructure layers.
* ``MODEL_PATH`` is checked right after argument parsing, before any
  file is looked up or any subprocess is spawned.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import NoReturn, TextIO

from explain_me.cli import exit_codes
from explain_me.cli.console import console, escape_markup, output
from explain_me.cli.logging_setup import setup_logging
from explain_me.config import Settings, load_settings
from explain_me.core.models import Explanation, Mode, RequestDescriptor
from explain_me.core.protocols import InferenceRunner
from explain_me.exceptions import ExplainMeError, SubprocessExitError, UsageError
from explain_me.version import __version__

logger = logging.getLogger(__name__)

_VALUE_FLAGS = frozenset({"-f", "-d", "--prompt"})
CHAT_PROMPT = "Question > "


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """Parser that reports problems as :class:`UsageError` (exit 1)."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message, hint=f"Run '{self.prog} --help' for usage.")


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Tokens the parser does not recognise are ignored, not rejected.
    """
    parser = _ArgumentParser(
        prog="explain-me",
        description="Explain source code with a local llama.cpp model.",
        epilog="MODEL_PATH must point at the model file passed to llama-cli.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-f", dest="file", metavar="PATH", help="Analyze a single file.")
    parser.add_argument(
        "-d",
        dest="directory",
        metavar="PATH",
        help="Analyze every file directly inside a directory.",
    )
    parser.add_argument(
        "--prompt",
        metavar="TEXT",
        help="Instruction sent to the model instead of the default one.",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Ask for an English summary of the code.",
    )
    parser.add_argument(
        "--bug-check",
        action="store_true",
        help="Ask for bugs, vulnerabilities and bad practices.",
    )
    parser.add_argument(
        "--chat-mode",
        action="store_true",
        help="Start an interactive session with the model.",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Check the environment and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug information to stderr.",
    )
    return parser


def resolve_request(args: argparse.Namespace) -> RequestDescriptor:
    """Turn parsed arguments into a :class:`RequestDescriptor`.

    Mode priority: ``--chat-mode``, then ``-f``, then ``-d``.
    """
    mode: Mode | None = None
    target: str | None = None
    if args.chat_mode:
        mode = Mode.CHAT
    elif args.file:
        mode, target = Mode.SINGLE_FILE, args.file
    elif args.directory:
        mode, target = Mode.DIRECTORY, args.directory

    return RequestDescriptor(
        mode=mode,
        target_path=target,
        custom_prompt=args.prompt or None,
        summary=args.summary,
        bug_check=args.bug_check,
    )


def _bind_flag_values(argv: list[str]) -> list[str]:
    """Join each value flag with the token after it as ``flag=value``.

    argparse refuses a value that starts with ``-``; binding it up front
    lets ``--prompt -Rewrite:`` or ``-f -notes.py`` through unchanged.
    A value flag in last position is left alone.
    """
    bound: list[str] = []
    i = 0
    while i < len(argv):
        token = argv[i]
        if token in _VALUE_FLAGS and i + 1 < len(argv):
            bound.append(f"{token}={argv[i + 1]}")
            i += 2
            continue
        bound.append(token)
        i += 1
    return bound


def parse_request(
    argv: list[str] | None = None,
) -> tuple[RequestDescriptor, argparse.Namespace]:
    """Parse *argv* into a request plus the raw namespace.

    A value flag always consumes the next token, even one that looks
    like an option.

    Raises
    ------
    UsageError
        When a flag that takes a value has none.
    """
    tokens = sys.argv[1:] if argv is None else argv
    args, ignored = _build_parser().parse_known_args(_bind_flag_values(tokens))
    args.ignored = ignored
    return resolve_request(args), args


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _make_runner(settings: Settings) -> InferenceRunner:
    """Locate llama-cli and wrap it in a runner."""
    from explain_me.infra.llama_cli_runner import LlamaCliRunner
    from explain_me.infra.llama_locator import require_llama_cli

    return LlamaCliRunner(require_llama_cli(settings.llama_cli))


def _render(explanation: Explanation) -> None:
    output.write(f"\n📄 {explanation.source_name}")
    output.write(explanation.text)


def _handle_file(request: RequestDescriptor, settings: Settings) -> int:
    """Explain a single file.  Any failure is fatal."""
    from explain_me.cli.progress import AnalysisSpinner
    from explain_me.core.explain_service import ExplainService
    from explain_me.infra.source_files import read_source_file

    path = Path(request.target_path or "")
    code = read_source_file(path)
    service = ExplainService(_make_runner(settings), settings)

    with AnalysisSpinner(f"Analyzing {path.name}..."):
        explanation = service.explain(path.name, code, request)
    _render(explanation)
    return exit_codes.SUCCESS


def _handle_directory(request: RequestDescriptor, settings: Settings) -> int:
    """Explain every regular file in a directory, one at a time.

    Unreadable files are skipped with a warning; a failing ``llama-cli``
    run aborts the whole batch.
    """
    from explain_me.cli.progress import AnalysisSpinner
    from explain_me.core.explain_service import ExplainService
    from explain_me.exceptions import FileReadError, PathNotFoundError
    from explain_me.infra.source_files import list_directory_files, read_source_file

    directory = Path(request.target_path or "")
    files = list_directory_files(directory)
    if not files:
        console.print(
            f"[yellow]⚠️ No files found in {escape_markup(str(directory))}[/yellow]"
        )
        return exit_codes.SUCCESS

    service = ExplainService(_make_runner(settings), settings)
    for path in files:
        try:
            code = read_source_file(path)
        except (FileReadError, PathNotFoundError) as exc:
            console.print(
                f"[yellow]⚠️ Skipping unreadable file {escape_markup(path.name)}:[/yellow] "
                f"{escape_markup(str(exc))}"
            )
            continue

        with AnalysisSpinner(f"🔍 Analyzing {path.name}..."):
            explanation = service.explain(path.name, code, request)
        _render(explanation)
    return exit_codes.SUCCESS


def _prompted_lines(stream: TextIO) -> Iterator[str]:
    """Yield lines from *stream*, showing :data:`CHAT_PROMPT` on stderr before each read."""
    while True:
        sys.stderr.write(CHAT_PROMPT)
        sys.stderr.flush()
        line = stream.readline()
        if not line:
            return
        yield line


def _handle_chat(settings: Settings) -> int:
    """Relay stdin lines to an interactive ``llama-cli`` session."""
    from explain_me.core.chat_service import ChatService

    service = ChatService(_make_runner(settings), settings)
    console.print("[bold blue]🔵 Entering chat mode. Type 'exit' to quit.[/bold blue]")
    service.run(_prompted_lines(sys.stdin), sys.stdout.buffer)
    return exit_codes.SUCCESS


def _handle_doctor(settings: Settings) -> int:
    """Dispatch the ``--doctor`` diagnostics command."""
    from explain_me.cli.doctor import run_doctor

    return run_doctor(settings)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run the explain-me CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    environ:
        Environment mapping.  When ``None`` (default), ``os.environ`` is
        used.  Accepting both enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    request, args = parse_request(argv)
    setup_logging(args.verbose)
    if args.ignored:
        logger.debug("Ignoring unrecognised arguments: %s", args.ignored)

    settings = load_settings(os.environ if environ is None else environ)

    if args.doctor:
        return _handle_doctor(settings)

    if request.mode is Mode.CHAT:
        return _handle_chat(settings)
    if request.mode is Mode.SINGLE_FILE:
        return _handle_file(request, settings)
    if request.mode is Mode.DIRECTORY:
        return _handle_directory(request, settings)

    # No mode flag: nothing to do.
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _report(exc: ExplainMeError) -> None:
    console.print(f"[bold red]❌ Error:[/bold red] {escape_markup(str(exc))}")
    if isinstance(exc, SubprocessExitError) and exc.stderr.strip():
        console.write(exc.stderr.rstrip())
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ExplainMeError as exc:
        _report(exc)
        sys.exit(exc.exit_code)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
