from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, Sequence


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


@dataclass(frozen=True)
class ChatOptions:
    temperature: float = 0.3
    max_tokens: int = 1500


@dataclass(frozen=True)
class ChatResponse:
    content: str
    tokens_used: int | None = None
    finish_reason: str | None = None


class AIClient(Protocol):
    async def chat(
        self, messages: Sequence[ChatMessage], options: ChatOptions | None = None
    ) -> ChatResponse: ...
