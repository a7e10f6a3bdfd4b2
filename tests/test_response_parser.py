"""Tests for answer extraction (core/response_parser.py).

Coverage:
* Missing close marker returns ``None``.
* Text after the *last* close marker is used.
* Sentinel truncation for both end markers.
* Empty remainder returns ``None``.
* Idempotence on already-extracted answers.
"""

from __future__ import annotations

import pytest

from explain_me.core.response_parser import END_SENTINELS, parse_response


class TestParseResponse:
    def test_no_close_marker_returns_none(self) -> None:
        assert parse_response("no closing tag") is None

    def test_empty_output_returns_none(self) -> None:
        assert parse_response("") is None

    def test_truncates_at_eof_sentinel(self) -> None:
        raw = "...[/INST] The answer is 42.\n> EOF\nignored"
        assert parse_response(raw) == "The answer is 42."

    def test_eof_by_user_sentinel(self) -> None:
        raw = "[INST] Some prompt [/INST] This is the answer > EOF by user"
        assert parse_response(raw) == "This is the answer"

    def test_truncates_at_endoftext(self) -> None:
        raw = "[INST] x [/INST]\nIt adds two numbers.<|endoftext|> trailing junk"
        assert parse_response(raw) == "It adds two numbers."

    def test_both_sentinels(self) -> None:
        raw = "[/INST] Answer <|endoftext|> more > EOF rest"
        assert parse_response(raw) == "Answer"

    def test_uses_last_close_marker(self) -> None:
        raw = (
            "[INST] Explain:\n\nprint('[/INST]')\n\n[/INST]"
            " It prints a marker."
        )
        assert parse_response(raw) == "It prints a marker."

    def test_truncates_at_first_sentinel_occurrence(self) -> None:
        raw = "[/INST] one > EOF two > EOF three"
        assert parse_response(raw) == "one"

    @pytest.mark.parametrize(
        "raw",
        [
            "[INST] prompt [/INST]",
            "[INST] prompt [/INST]   \n\t ",
            "[INST] prompt [/INST] > EOF by user",
            "[/INST]<|endoftext|>",
        ],
    )
    def test_empty_answer_returns_none(self, raw: str) -> None:
        assert parse_response(raw) is None

    def test_sentinels(self) -> None:
        assert END_SENTINELS == ("> EOF", "<|endoftext|>")


class TestIdempotence:
    def test_reparsing_answer_without_markers_returns_none(self) -> None:
        answer = parse_response("[/INST] Plain answer.\n> EOF")
        assert answer == "Plain answer."
        # No marker left: the caller falls back to the text itself.
        assert parse_response(answer) is None

    def test_reparsing_answer_with_marker_is_stable(self) -> None:
        answer = parse_response("[/INST] first [/INST] final answer")
        assert answer == "final answer"
        assert parse_response(f"[/INST] {answer}") == answer
