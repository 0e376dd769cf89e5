"""LLM instance management.

This module provides a cache layer for the chat model instances used by the
concierge. A provider with no API key yields no model, and callers fall back
to local behaviour.
"""

import logging
import os
from typing import Dict, List, Optional

from langchain_openai import ChatOpenAI

from config import (
    CONCIERGE_MAX_TOKENS,
    CONCIERGE_TIMEOUT_SECONDS,
    DEFAULT_LLM_PROVIDER,
    LLM_PROVIDERS,
    TEMPERATURE,
)

logger = logging.getLogger(__name__)

_llm_manager_instance: Optional["LLMManager"] = None


def get_llm_manager() -> "LLMManager":
    """Return a singleton LLMManager instance."""
    global _llm_manager_instance
    if _llm_manager_instance is None:
        _llm_manager_instance = LLMManager()
    return _llm_manager_instance


class LLMManager:
    """Manages active LLM instances keyed by provider and model."""

    def __init__(self) -> None:
        self.active_llms: Dict[str, ChatOpenAI] = {}
        logger.info("LLMManager initialized")

    def _validate_provider(self, provider: str) -> None:
        if provider not in LLM_PROVIDERS:
            raise ValueError(f"Unsupported provider: {provider}")

    def _get_env_api_key(self, provider: str) -> Optional[str]:
        """Return provider API key from environment if set."""
        env_key = LLM_PROVIDERS.get(provider, {}).get("env_key")
        return os.getenv(env_key) if env_key else None

    def list_provider_statuses(self) -> List[Dict[str, object]]:
        """Return which providers have a key configured (no keys returned)."""
        return [
            {
                "provider": provider,
                "display_name": cfg["display_name"],
                "has_api_key": bool(self._get_env_api_key(provider)),
                "is_default": provider == DEFAULT_LLM_PROVIDER,
            }
            for provider, cfg in LLM_PROVIDERS.items()
        ]

    def get_llm(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ) -> Optional[ChatOpenAI]:
        """Get a chat model for the provider/model, or None without a key."""
        resolved_provider = provider or DEFAULT_LLM_PROVIDER
        self._validate_provider(resolved_provider)
        resolved_model = model or LLM_PROVIDERS[resolved_provider]["default_model"]

        cache_key = f"{resolved_provider}:{resolved_model}"
        cached = self.active_llms.get(cache_key)
        if cached:
            return cached

        api_key = self._get_env_api_key(resolved_provider)
        if not api_key:
            logger.warning(
                "No API key for provider %s; concierge will use local ranking",
                resolved_provider,
            )
            return None

        base_url = LLM_PROVIDERS[resolved_provider]["base_url"]
        kwargs = {
            "model": resolved_model,
            "api_key": api_key,
            "temperature": TEMPERATURE,
            "max_tokens": CONCIERGE_MAX_TOKENS,
            "timeout": CONCIERGE_TIMEOUT_SECONDS,
            "max_retries": 0,
        }
        if base_url:
            kwargs["base_url"] = base_url

        llm = ChatOpenAI(**kwargs)
        self.active_llms[cache_key] = llm
        return llm

