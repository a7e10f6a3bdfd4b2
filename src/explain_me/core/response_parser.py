"""Answer extraction from raw ``llama-cli`` output.

``llama-cli`` echoes the prompt before the generated text and may
append end-of-generation markers, so the answer is whatever follows the
*last* closing instruction marker, cut at the first sentinel.
"""

from __future__ import annotations

from explain_me.core.prompt_builder import INST_CLOSE

END_SENTINELS: tuple[str, ...] = ("> EOF", "<|endoftext|>")
"""Substrings the binary emits once generation is over."""


def parse_response(raw_output: str) -> str | None:
    """Return the model's answer from *raw_output*, or ``None``.

    ``None`` means no ``[/INST]`` marker was found or nothing useful
    remained after trimming; callers then show *raw_output* verbatim.
    """
    if INST_CLOSE not in raw_output:
        return None

    answer = raw_output.split(INST_CLOSE)[-1].strip()
    for sentinel in END_SENTINELS:
        if sentinel in answer:
            answer = answer.split(sentinel, 1)[0]

    answer = answer.strip()
    return answer or None
