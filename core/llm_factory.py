"""
LLM Factory - Factory Pattern Implementation
Centralized factory for creating LLM instances with different providers.
"""
import logging
from typing import Optional
from langchain_core.language_models.chat_models import BaseChatModel

from core.llm_providers import (
    LLMProvider,
    GeminiProvider,
    OpenAIProvider,
)
from core.settings import settings

logger = logging.getLogger(__name__)


class LLMFactory:
    """
    Factory class for creating LLM instances.
    Implements Factory Pattern for clean, extensible object creation.
    """

    # Registry of available providers
    _providers: dict[str, type[LLMProvider]] = {
        "gemini": GeminiProvider,
        "openai": OpenAIProvider,
    }

    @classmethod
    def create(
        cls,
        provider_name: str,
        model: Optional[str] = None,
        temperature: float = 0.0,
        **provider_kwargs
    ) -> BaseChatModel:
        """
        Create an LLM instance using the specified provider.

        Args:
            provider_name: Name of the provider ("gemini", "openai")
            model: Optional model name (uses provider default if None)
            temperature: Temperature setting (0.0 - 1.0)
            **provider_kwargs: Additional provider-specific arguments

        Returns:
            Configured LLM instance

        Raises:
            ValueError: If provider is not registered
            RuntimeError: If provider configuration is invalid

        Examples:
            >>> llm = LLMFactory.create("gemini")
            >>> llm = LLMFactory.create("openai", model="gpt-4o", temperature=0.7)
        """
        provider_name = provider_name.lower()

        if provider_name not in cls._providers:
            available = ", ".join(cls._providers.keys())
            raise ValueError(
                f"Unknown provider: '{provider_name}'. "
                f"Available providers: {available}"
            )

        # Instantiate provider and create LLM
        provider_class = cls._providers[provider_name]
        provider = provider_class(**provider_kwargs)

        return provider.create_llm(model=model, temperature=temperature)

    @classmethod
    def list_providers(cls) -> list[str]:
        """Get list of registered provider names."""
        return list(cls._providers.keys())


class LLMClientSingleton:
    """Singleton holder for the chat model so the UI and tools reuse one connection."""
    _instance = None
    _llm_client = None
    _current_provider = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def get_client(self, provider: Optional[str] = None) -> BaseChatModel:
        """
        Get or create the LLM client for a provider.

        Raises the factory/provider errors as-is; there is no fallback to a
        different provider.
        """
        provider = (provider or settings.LLM_PROVIDER).lower()
        if self._llm_client is not None and self._current_provider == provider:
            return self._llm_client

        self._llm_client = LLMFactory.create(
            provider,
            model=settings.MODEL_NAME,
            temperature=settings.TEMPERATURE,
        )
        self._current_provider = provider
        logger.info(f"✅ Connected to {provider}")
        return self._llm_client

    def reset(self) -> None:
        """Drop the cached client."""
        self._llm_client = None
        self._current_provider = None
