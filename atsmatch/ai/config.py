from __future__ import annotations

import os
from dataclasses import dataclass

SUPPORTED_PROVIDERS = ("openai",)


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str | None = None
    base_url: str | None = None
    timeout_s: float = 30.0
    max_retries: int = 2

    @property
    def configured(self) -> bool:
        return self.provider in SUPPORTED_PROVIDERS and bool(self.api_key)


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def load_ai_config() -> AIConfig:
    provider = os.getenv("AI_PROVIDER", "openai").strip().lower()
    model = (os.getenv("AI_MODEL") or os.getenv("OPENAI_MODEL") or "gpt-4o-mini").strip()
    api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
    if _looks_like_placeholder(api_key):
        api_key = ""
    return AIConfig(
        provider=provider,
        model=model,
        api_key=api_key or None,
        base_url=(os.getenv("OPENAI_BASE_URL") or "").strip() or None,
        timeout_s=float(os.getenv("OPENAI_TIMEOUT_S", "30")),
        max_retries=int(os.getenv("OPENAI_MAX_RETRIES", "2")),
    )
