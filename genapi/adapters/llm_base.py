from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol


@dataclass
class LLMResponse:
    raw_text: str
    usage: Optional[Dict[str, Any]] = None


class LLMAdapter(Protocol):
    async def complete(self, system_prompt: str, user_text: str) -> LLMResponse:
        raise NotImplementedError

    async def send(self, system_prompt: str, user_text: str) -> str:
        response = await self.complete(system_prompt, user_text)
        return response.raw_text
