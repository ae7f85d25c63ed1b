"""
Pytest configuration and fixtures
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from curio.storage.document_store import DocumentStore
from curio.storage.schemas import LearningPreference, LearningRequest


class ScriptedLLMClient:
    """LanguageModelClient stand-in that replays canned replies and records prompts."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []

    @property
    def call_count(self):
        return len(self.prompts)

    async def complete(self, prompt):
        self.prompts.append(prompt)
        if not self.replies:
            raise AssertionError(f"Unexpected LLM call: {prompt[:80]}")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class StaticSearchClient:
    """SearchClient stand-in returning fixed results (or raising)."""

    def __init__(self, results=None, error=None):
        self.results = results or []
        self.error = error
        self.queries = []

    def is_available(self):
        return True

    async def search(self, query, max_results=None):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.results)


@pytest.fixture
def store(tmp_path):
    """Document store rooted in a temporary directory"""
    return DocumentStore(tmp_path / "data")


@pytest.fixture
def sample_request():
    return LearningRequest(
        subject="Kubernetes",
        category="DevOps",
        learning_preference=LearningPreference.GETTING_STARTED,
    )


@pytest.fixture
def search_results():
    """Five Tavily-shaped search results"""
    return [
        {
            "title": f"Kubernetes guide {i}",
            "url": f"https://example.com/k8s/{i}",
            "content": f"Kubernetes tutorial number {i}",
            "score": 1 - i / 10,
        }
        for i in range(1, 6)
    ]


@pytest.fixture
def make_llm():
    """Factory for a scripted LLM client: make_llm("reply 1", "reply 2", ...)"""
    return ScriptedLLMClient


@pytest.fixture
def make_search():
    """Factory for a static search client: make_search(results=[...]) or make_search(error=...)"""
    return StaticSearchClient
