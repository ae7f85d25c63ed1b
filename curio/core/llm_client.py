import logging
from typing import Callable, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage

from curio.config import settings as config
from curio.config.credentials import get_api_key
from curio.core.errors import ConfigurationError, LLMClientError
from curio.core.llm_utils import extract_content_as_string

logger = logging.getLogger(__name__)


def create_llm(api_key_lookup: Callable[[str], Optional[str]] = get_api_key) -> BaseChatModel:
    """Create LLM instance based on configured provider."""
    provider = getattr(config, 'LLM_PROVIDER', 'google').lower()
    model_name = getattr(config, 'LLM_MODEL', 'gemini-2.5-flash')
    temperature = getattr(config, 'LLM_TEMPERATURE', 0)

    if provider == 'google':
        from langchain_google_genai import ChatGoogleGenerativeAI

        api_key = api_key_lookup("GOOGLE_API_KEY")
        if not api_key:
            raise ConfigurationError(
                "GOOGLE_API_KEY not set. Please set it as environment variable "
                "or in Secret Manager. Get your key from: https://aistudio.google.com/app/apikey"
            )
        return ChatGoogleGenerativeAI(
            model=model_name,
            temperature=temperature,
            max_output_tokens=getattr(config, 'LLM_MAX_TOKENS', 4000),
            google_api_key=api_key
        )
    if provider == 'ollama':
        from langchain_ollama import ChatOllama
        return ChatOllama(model=model_name, temperature=temperature)

    raise ConfigurationError(f"Unknown LLM_PROVIDER: {provider}")


class LanguageModelClient:
    """
    Minimal text-in/text-out wrapper around a LangChain chat model.

    The model is rebuilt for every call so the API key is looked up per
    operation. Pass ``llm`` to pin a specific model instance (tests, notebooks).
    """

    def __init__(
        self,
        llm: Optional[BaseChatModel] = None,
        llm_factory: Callable[[], BaseChatModel] = create_llm
    ):
        self._llm = llm
        self._llm_factory = llm_factory

    def _get_llm(self) -> BaseChatModel:
        if self._llm is not None:
            return self._llm
        return self._llm_factory()

    async def complete(self, prompt: str) -> str:
        """
        Send a single prompt and return the model's text.

        Raises:
            ConfigurationError: provider or API key missing
            LLMClientError: the model call failed
        """
        llm = self._get_llm()
        try:
            # Gemini requires at least one non-system message, use HumanMessage instead of SystemMessage
            response = await llm.ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            logger.error(f"LLM call failed: {e}")
            raise LLMClientError(str(e)) from e
        return extract_content_as_string(response)
