"""
LLM Providers - Strategy Pattern Implementation
Each provider is a separate class following the Strategy Pattern.
"""
from abc import ABC, abstractmethod
from typing import Optional
from langchain_openai import ChatOpenAI
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_core.language_models.chat_models import BaseChatModel

from core.settings import settings


class LLMProvider(ABC):
    """
    Abstract Base Class for LLM Providers (Strategy Pattern).
    All providers must implement this interface.
    """

    @abstractmethod
    def create_llm(self, model: Optional[str] = None, temperature: float = 0.0) -> BaseChatModel:
        """
        Create and return an LLM instance.

        Args:
            model: Model identifier (uses default if None)
            temperature: Temperature setting

        Returns:
            Configured LLM instance
        """
        pass

    @abstractmethod
    def validate_configuration(self) -> None:
        """Validate that provider configuration is complete."""
        pass

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Return the default model for this provider."""
        pass


class GeminiProvider(LLMProvider):
    """Google Gemini LLM Provider Implementation."""

    def __init__(self, api_key: Optional[str] = None):
        """
        Initialize Gemini provider.

        Args:
            api_key: API key (defaults to settings.GEMINI_API_KEY)
        """
        self.api_key = api_key or settings.GEMINI_API_KEY
        self.validate_configuration()

    @property
    def default_model(self) -> str:
        return "gemini-2.5-flash"

    def validate_configuration(self) -> None:
        """Validate Gemini configuration."""
        if not self.api_key:
            raise RuntimeError(
                "Gemini configuration incomplete. "
                "Set GEMINI_API_KEY in your .env file."
            )

    def create_llm(self, model: Optional[str] = None, temperature: float = 0.0) -> ChatGoogleGenerativeAI:
        """
        Create Gemini LLM instance in JSON response mode.

        The mood generator parses the reply as JSON, so the response MIME type
        is pinned to application/json. Retries and timeout come from settings
        (no retries, no timeout by default).
        """
        return ChatGoogleGenerativeAI(
            google_api_key=self.api_key,
            model=model or self.default_model,
            temperature=temperature,
            request_timeout=settings.LLM_REQUEST_TIMEOUT,
            max_retries=settings.LLM_MAX_RETRIES,
            response_mime_type="application/json",
        )


class OpenAIProvider(LLMProvider):
    """OpenAI LLM Provider Implementation."""

    def __init__(self, api_key: Optional[str] = None):
        """
        Initialize OpenAI provider.

        Args:
            api_key: API key (defaults to settings.OPENAI_API_KEY)
        """
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.validate_configuration()

    @property
    def default_model(self) -> str:
        return "gpt-4o-mini"

    def validate_configuration(self) -> None:
        """Validate OpenAI configuration."""
        if not self.api_key:
            raise RuntimeError(
                "OpenAI configuration incomplete. "
                "Set OPENAI_API_KEY in your .env file."
            )

    def create_llm(self, model: Optional[str] = None, temperature: float = 0.0) -> ChatOpenAI:
        """Create OpenAI LLM instance with retries and timeout from settings."""
        return ChatOpenAI(
            api_key=self.api_key,
            model=model or self.default_model,
            temperature=temperature,
            request_timeout=settings.LLM_REQUEST_TIMEOUT,
            max_retries=settings.LLM_MAX_RETRIES,
        )
