"""Tests for prompt construction (core/prompt_builder.py).

Pure functions — no mocking needed.

Coverage:
* Exact output format for the default instruction.
* Instruction priority across every flag combination.
* Code is inserted verbatim and wrapped by both markers.
* RequestDescriptor convenience wrapper.
"""

from __future__ import annotations

import pytest

from explain_me.core.models import Mode, RequestDescriptor
from explain_me.core.prompt_builder import (
    BUG_CHECK_INSTRUCTION,
    EXPLAIN_INSTRUCTION,
    INST_CLOSE,
    INST_OPEN,
    SUMMARY_INSTRUCTION,
    build_prompt,
    prompt_for,
    select_instruction,
)

CODE = "func add(a int, b int) int { return a + b }"


# ---------------------------------------------------------------------------
# Output format
# ---------------------------------------------------------------------------

class TestPromptFormat:
    def test_default_prompt_exact(self) -> None:
        assert build_prompt(CODE) == (
            "[INST] Explain what this code does:\n\n"
            "func add(a int, b int) int { return a + b }\n\n[/INST]"
        )

    def test_custom_prompt_exact(self) -> None:
        assert build_prompt(CODE, "Describe this Go function:") == (
            "[INST] Describe this Go function:\n\n"
            "func add(a int, b int) int { return a + b }\n\n[/INST]"
        )

    def test_code_is_not_escaped_or_truncated(self) -> None:
        code = "x = '[/INST]'\n" + "a" * 100_000 + "\n\t<|endoftext|>"
        prompt = build_prompt(code)
        assert code in prompt
        assert prompt.startswith(f"{INST_OPEN} ")
        assert prompt.endswith(f"\n\n{INST_CLOSE}")

    def test_empty_code(self) -> None:
        assert build_prompt("") == f"{INST_OPEN} {EXPLAIN_INSTRUCTION}\n\n\n\n{INST_CLOSE}"


# ---------------------------------------------------------------------------
# Instruction priority
# ---------------------------------------------------------------------------

class TestInstructionPriority:
    @pytest.mark.parametrize(
        ("custom", "summary", "bug_check", "expected"),
        [
            (None, False, False, EXPLAIN_INSTRUCTION),
            (None, True, False, SUMMARY_INSTRUCTION),
            (None, False, True, BUG_CHECK_INSTRUCTION),
            (None, True, True, BUG_CHECK_INSTRUCTION),
            ("Custom:", False, False, "Custom:"),
            ("Custom:", True, False, "Custom:"),
            ("Custom:", False, True, "Custom:"),
            ("Custom:", True, True, "Custom:"),
            ("", True, False, SUMMARY_INSTRUCTION),
        ],
    )
    def test_first_match_wins(
        self,
        custom: str | None,
        summary: bool,
        bug_check: bool,
        expected: str,
    ) -> None:
        assert select_instruction(custom, summary, bug_check) == expected
        prompt = build_prompt(CODE, custom, summary, bug_check)
        assert prompt.startswith(f"{INST_OPEN} {expected}\n\n")
        assert CODE in prompt
        assert prompt.endswith(INST_CLOSE)

    def test_instruction_texts(self) -> None:
        assert SUMMARY_INSTRUCTION.startswith("Summarize this code in English")
        assert "bugs, vulnerabilities, or bad practices" in BUG_CHECK_INSTRUCTION


# ---------------------------------------------------------------------------
# RequestDescriptor wrapper
# ---------------------------------------------------------------------------

class TestPromptFor:
    def test_uses_request_flags(self) -> None:
        request = RequestDescriptor(
            mode=Mode.SINGLE_FILE,
            target_path="main.go",
            summary=True,
        )
        assert prompt_for(CODE, request) == build_prompt(CODE, summary=True)

    def test_custom_prompt_from_request(self) -> None:
        request = RequestDescriptor(
            mode=Mode.DIRECTORY,
            target_path="src",
            custom_prompt="Review:",
            bug_check=True,
        )
        assert prompt_for(CODE, request).startswith("[INST] Review:\n\n")
