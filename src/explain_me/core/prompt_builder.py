"""Instruction-formatted prompt construction.

Prompts use the Llama-2 instruction delimiters::

    [INST] <instruction>

    <code>

    [/INST]

The code is inserted verbatim.  Nothing is escaped or truncated, so a
file larger than the model's context window reaches the binary as is.
"""

from __future__ import annotations

from explain_me.core.models import RequestDescriptor

INST_OPEN = "[INST]"
INST_CLOSE = "[/INST]"

EXPLAIN_INSTRUCTION = "Explain what this code does:"
SUMMARY_INSTRUCTION = (
    "Summarize this code in English, explaining its purpose and main functions:"
)
BUG_CHECK_INSTRUCTION = (
    "Analyze this code for bugs, vulnerabilities, or bad practices. "
    "Explain any issues found:"
)


def select_instruction(
    custom_prompt: str | None,
    summary: bool,
    bug_check: bool,
) -> str:
    """Return the instruction text; first match wins.

    Priority: custom prompt, bug check, summary, generic explain.
    """
    if custom_prompt:
        return custom_prompt
    if bug_check:
        return BUG_CHECK_INSTRUCTION
    if summary:
        return SUMMARY_INSTRUCTION
    return EXPLAIN_INSTRUCTION


def build_prompt(
    code: str,
    custom_prompt: str | None = None,
    summary: bool = False,
    bug_check: bool = False,
) -> str:
    """Wrap *code* and the selected instruction in the instruction markers."""
    instruction = select_instruction(custom_prompt, summary, bug_check)
    return f"{INST_OPEN} {instruction}\n\n{code}\n\n{INST_CLOSE}"


def prompt_for(code: str, request: RequestDescriptor) -> str:
    """:func:`build_prompt` driven by a :class:`RequestDescriptor`."""
    return build_prompt(
        code,
        custom_prompt=request.custom_prompt,
        summary=request.summary,
        bug_check=request.bug_check,
    )
