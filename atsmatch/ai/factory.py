from __future__ import annotations

import logging

from atsmatch.ai.config import AIConfig, load_ai_config
from atsmatch.ai.providers.openai_provider import OpenAIProvider
from atsmatch.ai.types import AIClient

logger = logging.getLogger(__name__)


def get_ai_client(cfg: AIConfig | None = None) -> AIClient:
    cfg = cfg or load_ai_config()

    if cfg.provider == "openai":
        return OpenAIProvider(
            model=cfg.model,
            api_key=cfg.api_key,
            base_url=cfg.base_url,
            timeout_s=cfg.timeout_s,
            max_retries=cfg.max_retries,
        )

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")


def get_optional_ai_client() -> AIClient | None:
    """Return a configured client, or None when the provider cannot be used."""
    cfg = load_ai_config()
    if not cfg.configured:
        logger.info("ai_client_unavailable provider=%s", cfg.provider)
        return None
    return get_ai_client(cfg)
