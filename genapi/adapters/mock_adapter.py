from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from .llm_base import LLMAdapter, LLMResponse

Reply = Union[str, BaseException]


@dataclass
class MockAdapter(LLMAdapter):
    """Replays scripted replies; the last one repeats once the script runs out.

    An exception in the script is raised instead of returned.
    """

    replies: List[Reply] = field(default_factory=lambda: ["{}"])
    calls: List[Tuple[str, str]] = field(default_factory=list)

    async def complete(self, system_prompt: str, user_text: str) -> LLMResponse:
        self.calls.append((system_prompt, user_text))
        index = min(len(self.calls), len(self.replies)) - 1
        reply = self.replies[index]
        if isinstance(reply, BaseException):
            raise reply
        return LLMResponse(raw_text=reply)
