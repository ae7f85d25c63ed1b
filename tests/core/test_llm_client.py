"""
Tests for core/llm_client.py and config/credentials.py - Model construction and key lookup
"""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from langchain_core.messages import AIMessage, HumanMessage

from curio.config.credentials import get_api_key
from curio.core.errors import ConfigurationError, LLMClientError
from curio.core.llm_client import LanguageModelClient, create_llm


class TestLanguageModelClient:

    @pytest.mark.asyncio
    async def test_complete_sends_human_message(self):
        llm = MagicMock()
        llm.ainvoke = AsyncMock(return_value=AIMessage(content="RESOLVED: Python | Programming Language"))

        result = await LanguageModelClient(llm=llm).complete("prompt text")

        assert result == "RESOLVED: Python | Programming Language"
        messages = llm.ainvoke.await_args.args[0]
        assert messages == [HumanMessage(content="prompt text")]

    @pytest.mark.asyncio
    async def test_model_errors_are_wrapped(self):
        llm = MagicMock()
        llm.ainvoke = AsyncMock(side_effect=RuntimeError("429 Resource exhausted"))

        with pytest.raises(LLMClientError, match="429"):
            await LanguageModelClient(llm=llm).complete("prompt")

    @pytest.mark.asyncio
    async def test_factory_called_per_operation(self):
        llm = MagicMock()
        llm.ainvoke = AsyncMock(return_value=AIMessage(content="ok"))
        factory = MagicMock(return_value=llm)
        client = LanguageModelClient(llm_factory=factory)

        await client.complete("one")
        await client.complete("two")

        assert factory.call_count == 2


class TestCreateLLM:

    def test_google_without_key(self):
        with patch('curio.core.llm_client.config') as mock_config:
            mock_config.LLM_PROVIDER = "google"
            mock_config.LLM_MODEL = "gemini-2.5-flash"
            mock_config.LLM_TEMPERATURE = 0

            with pytest.raises(ConfigurationError, match="GOOGLE_API_KEY"):
                create_llm(api_key_lookup=lambda name: None)

    def test_unknown_provider(self):
        with patch('curio.core.llm_client.config') as mock_config:
            mock_config.LLM_PROVIDER = "openai"

            with pytest.raises(ConfigurationError, match="openai"):
                create_llm(api_key_lookup=lambda name: "key")

    def test_ollama(self):
        with patch('curio.core.llm_client.config') as mock_config, \
                patch('langchain_ollama.ChatOllama') as mock_ollama:
            mock_config.LLM_PROVIDER = "ollama"
            mock_config.LLM_MODEL = "llama3.1"
            mock_config.LLM_TEMPERATURE = 0

            create_llm()

        mock_ollama.assert_called_once_with(model="llama3.1", temperature=0)


class TestGetApiKey:

    def test_environment_variable(self, monkeypatch):
        monkeypatch.setenv("TAVILY_API_KEY", "tvly-test")

        assert get_api_key("TAVILY_API_KEY") == "tvly-test"

    def test_missing_locally(self, monkeypatch):
        for name in ("TAVILY_API_KEY", "GAE_ENV", "K_SERVICE", "GOOGLE_CLOUD_PROJECT"):
            monkeypatch.delenv(name, raising=False)

        assert get_api_key("TAVILY_API_KEY") is None

    def test_lookup_is_not_cached(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "old")
        assert get_api_key("GOOGLE_API_KEY") == "old"

        monkeypatch.setenv("GOOGLE_API_KEY", "rotated")
        assert get_api_key("GOOGLE_API_KEY") == "rotated"
