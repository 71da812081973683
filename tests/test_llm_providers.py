"""
Unit tests for LLM Providers

Tests for provider implementations, configuration validation,
and LLM instance creation with proper error handling.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from unittest.mock import patch, MagicMock
from langchain_core.language_models.chat_models import BaseChatModel

from core.llm_providers import (
    LLMProvider,
    OpenAIProvider,
    GeminiProvider,
)


class TestLLMProviderInterface:
    """Test abstract LLMProvider interface"""

    def test_llm_provider_is_abstract(self):
        """Should not allow instantiating abstract LLMProvider"""
        with pytest.raises(TypeError):
            LLMProvider()

    def test_llm_provider_requires_create_llm(self):
        """Should require create_llm implementation"""
        class IncompleteProvider(LLMProvider):
            def validate_configuration(self):
                pass

            @property
            def default_model(self):
                return "model"

        with pytest.raises(TypeError):
            IncompleteProvider()

    def test_llm_provider_requires_default_model_property(self):
        """Should require default_model property implementation"""
        class IncompleteProvider(LLMProvider):
            def create_llm(self, model=None, temperature=0.0):
                return MagicMock(spec=BaseChatModel)

            def validate_configuration(self):
                pass

        with pytest.raises(TypeError):
            IncompleteProvider()


class TestGeminiProvider:
    """Test Google Gemini LLM Provider"""

    @patch('core.llm_providers.settings')
    def test_initialization_with_settings(self, mock_settings):
        """Should initialize with settings values"""
        mock_settings.GEMINI_API_KEY = "test-key"

        provider = GeminiProvider()

        assert provider.api_key == "test-key"

    @patch('core.llm_providers.settings')
    def test_initialization_with_custom_key(self, mock_settings):
        """Should prefer an explicit API key"""
        mock_settings.GEMINI_API_KEY = "settings-key"

        provider = GeminiProvider(api_key="custom-key")

        assert provider.api_key == "custom-key"

    @patch('core.llm_providers.settings')
    def test_missing_api_key_raises_error(self, mock_settings):
        """Should raise RuntimeError if API key is missing"""
        mock_settings.GEMINI_API_KEY = None

        with pytest.raises(RuntimeError) as exc_info:
            GeminiProvider()

        assert "GEMINI_API_KEY" in str(exc_info.value)

    @patch('core.llm_providers.settings')
    def test_default_model(self, mock_settings):
        """Should return correct default model"""
        mock_settings.GEMINI_API_KEY = "test-key"

        provider = GeminiProvider()

        assert provider.default_model == "gemini-2.5-flash"

    @patch('core.llm_providers.ChatGoogleGenerativeAI')
    @patch('core.llm_providers.settings')
    def test_create_llm(self, mock_settings, mock_chat_gemini):
        """Should create a JSON-mode ChatGoogleGenerativeAI without retries"""
        mock_settings.GEMINI_API_KEY = "test-key"
        mock_settings.LLM_REQUEST_TIMEOUT = None
        mock_settings.LLM_MAX_RETRIES = 0
        mock_llm = MagicMock(spec=BaseChatModel)
        mock_chat_gemini.return_value = mock_llm

        provider = GeminiProvider()
        result = provider.create_llm(temperature=0.7)

        call_kwargs = mock_chat_gemini.call_args[1]
        assert call_kwargs["google_api_key"] == "test-key"
        assert call_kwargs["model"] == "gemini-2.5-flash"
        assert call_kwargs["temperature"] == 0.7
        assert call_kwargs["request_timeout"] is None
        assert call_kwargs["max_retries"] == 0
        assert call_kwargs["response_mime_type"] == "application/json"
        assert result is mock_llm

    @patch('core.llm_providers.ChatGoogleGenerativeAI')
    @patch('core.llm_providers.settings')
    def test_create_llm_with_custom_model(self, mock_settings, mock_chat_gemini):
        """Should use custom model if provided"""
        mock_settings.GEMINI_API_KEY = "test-key"
        mock_chat_gemini.return_value = MagicMock(spec=BaseChatModel)

        provider = GeminiProvider()
        provider.create_llm(model="gemini-2.5-pro")

        call_kwargs = mock_chat_gemini.call_args[1]
        assert call_kwargs["model"] == "gemini-2.5-pro"


class TestOpenAIProvider:
    """Test OpenAI LLM Provider"""

    @patch('core.llm_providers.settings')
    def test_initialization_with_settings(self, mock_settings):
        """Should initialize with settings values"""
        mock_settings.OPENAI_API_KEY = "test-key"

        provider = OpenAIProvider()

        assert provider.api_key == "test-key"

    @patch('core.llm_providers.settings')
    def test_missing_api_key_raises_error(self, mock_settings):
        """Should raise RuntimeError if API key is missing"""
        mock_settings.OPENAI_API_KEY = None

        with pytest.raises(RuntimeError) as exc_info:
            OpenAIProvider()

        assert "OPENAI_API_KEY" in str(exc_info.value)

    @patch('core.llm_providers.ChatOpenAI')
    @patch('core.llm_providers.settings')
    def test_create_llm(self, mock_settings, mock_chat_openai):
        """Should create ChatOpenAI instance with correct parameters"""
        mock_settings.OPENAI_API_KEY = "test-key"
        mock_settings.LLM_REQUEST_TIMEOUT = None
        mock_settings.LLM_MAX_RETRIES = 0
        mock_llm = MagicMock(spec=BaseChatModel)
        mock_chat_openai.return_value = mock_llm

        provider = OpenAIProvider()
        result = provider.create_llm()

        mock_chat_openai.assert_called_once()
        call_kwargs = mock_chat_openai.call_args[1]
        assert call_kwargs["api_key"] == "test-key"
        assert call_kwargs["model"] == "gpt-4o-mini"
        assert call_kwargs["temperature"] == 0.0
        assert call_kwargs["max_retries"] == 0
        assert result is mock_llm
