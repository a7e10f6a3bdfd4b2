"""Regression tests for the optional Rich UI dependency.

Bootstrap commands and the explain flow must keep working when Rich is
missing, falling back to plain ``print`` output.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from explain_me.cli import exit_codes
from explain_me.cli.app import main
from explain_me.cli.console import escape_markup, get_rich_console
from explain_me.cli.progress import AnalysisSpinner
from explain_me.exceptions import MissingDependencyError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("rich", "rich.console", "rich.table", "rich.logging", "rich.markup"):
        monkeypatch.setitem(sys.modules, name, None)


@pytest.fixture
def make_runner(runner: MagicMock) -> Iterator[MagicMock]:
    with patch("explain_me.cli.app._make_runner", return_value=runner) as factory:
        yield factory


def test_help_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"], environ={})
    assert exc_info.value.code == 0


def test_version_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"], environ={})
    assert exc_info.value.code == 0


def test_console_raises_typed_error_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(MissingDependencyError, match="rich is not installed"):
        get_rich_console()


def test_escape_is_identity_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    assert escape_markup("[bold]x[/bold]") == "[bold]x[/bold]"


def test_spinner_prints_description_without_rich(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    with AnalysisSpinner("Analyzing main.py..."):
        pass
    assert "Analyzing main.py..." in capsys.readouterr().err


def test_explain_file_works_without_rich(
    tmp_path: Path,
    environ: dict[str, str],
    make_runner: MagicMock,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    source = tmp_path / "hello.py"
    source.write_text("print('hi')\n")

    code = main(["-f", str(source), "-v"], environ=environ)

    assert code == exit_codes.SUCCESS
    out = capsys.readouterr().out
    assert "📄 hello.py" in out
    assert "The answer is 42." in out


def test_skip_warning_without_rich(
    tmp_path: Path,
    environ: dict[str, str],
    make_runner: MagicMock,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    (tmp_path / "a.py").write_text("x\n")
    (tmp_path / "b.py").mkdir()

    with patch("explain_me.infra.source_files.list_directory_files") as mock_list:
        mock_list.return_value = [tmp_path / "a.py", tmp_path / "b.py"]
        code = main(["-d", str(tmp_path)], environ=environ)

    assert code == exit_codes.SUCCESS
    captured = capsys.readouterr()
    assert "📄 a.py" in captured.out
    assert "Skipping unreadable file b.py" in captured.err
