"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem access and no subprocess handling.
* No imports from ``cli`` or ``infra``.
* Prompt building and response parsing are deterministic.
"""

from explain_me.core.chat_service import ChatService, is_exit_command
from explain_me.core.explain_service import ExplainService
from explain_me.core.models import Explanation, InferenceResult, Mode, RequestDescriptor
from explain_me.core.prompt_builder import build_prompt
from explain_me.core.protocols import InferenceRunner, InteractiveSession
from explain_me.core.response_parser import parse_response

__all__: list[str] = [
    "ChatService",
    "ExplainService",
    "Explanation",
    "InferenceResult",
    "InferenceRunner",
    "InteractiveSession",
    "Mode",
    "RequestDescriptor",
    "build_prompt",
    "is_exit_command",
    "parse_response",
]
