"""
Tests for tools/web_tools.py - Tavily web search client
"""
import json
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from curio.core.errors import SearchClientError
from curio.tools.web_tools import SearchClient, parse_search_payload


def key_lookup(value):
    return lambda name: value


TAVILY_PAYLOAD = {
    "query": "tutorial for basics of Kubernetes in DevOps",
    "results": [
        {
            "title": "Kubernetes Basics",
            "url": "https://kubernetes.io/docs/tutorials/kubernetes-basics/",
            "content": "x" * 800,
            "score": 0.92,
        },
        {
            "title": "No URL entry",
            "content": "dropped",
            "score": 0.5,
        },
    ],
}


class TestSearchClient:
    """Test SearchClient class"""

    def test_is_available_without_key(self):
        assert SearchClient(api_key_lookup=key_lookup(None)).is_available() is False

    def test_is_available_with_key(self):
        assert SearchClient(api_key_lookup=key_lookup("test_key")).is_available() is True

    @pytest.mark.asyncio
    async def test_search_with_api(self):
        """Test web search with Tavily API"""
        with patch('curio.tools.web_tools.TavilySearch') as mock_tavily_class:
            mock_tavily_instance = MagicMock()
            mock_tavily_instance.ainvoke = AsyncMock(return_value=TAVILY_PAYLOAD)
            mock_tavily_class.return_value = mock_tavily_instance

            client = SearchClient(api_key_lookup=key_lookup("test_key"), search_depth="advanced")
            results = await client.search("kubernetes", max_results=3)

        mock_tavily_class.assert_called_once_with(
            max_results=3, search_depth="advanced", tavily_api_key="test_key"
        )
        mock_tavily_instance.ainvoke.assert_awaited_once_with({"query": "kubernetes"})
        assert len(results) == 1
        assert results[0]["url"] == "https://kubernetes.io/docs/tutorials/kubernetes-basics/"
        assert len(results[0]["content"]) == 500
        assert results[0]["score"] == 0.92

    @pytest.mark.asyncio
    async def test_search_without_key(self):
        client = SearchClient(api_key_lookup=key_lookup(None))

        with pytest.raises(SearchClientError, match="TAVILY_API_KEY"):
            await client.search("kubernetes")

    @pytest.mark.asyncio
    async def test_search_transport_error(self):
        with patch('curio.tools.web_tools.TavilySearch') as mock_tavily_class:
            mock_tavily_class.return_value.ainvoke = AsyncMock(side_effect=ConnectionError("timed out"))

            client = SearchClient(api_key_lookup=key_lookup("test_key"))
            with pytest.raises(SearchClientError, match="timed out"):
                await client.search("kubernetes")

    @pytest.mark.asyncio
    async def test_results_are_capped(self):
        payload = {"results": [{"title": str(i), "url": f"https://example.com/{i}"} for i in range(8)]}
        with patch('curio.tools.web_tools.TavilySearch') as mock_tavily_class:
            mock_tavily_class.return_value.ainvoke = AsyncMock(return_value=payload)

            results = await SearchClient(api_key_lookup=key_lookup("k")).search("q", max_results=5)

        assert [r["title"] for r in results] == ["0", "1", "2", "3", "4"]


class TestParseSearchPayload:

    def test_list_payload(self):
        results = parse_search_payload([{"title": "A", "url": "https://a.example"}])

        assert results == [{"title": "A", "url": "https://a.example", "content": "", "score": 0}]

    def test_json_string_payload(self):
        assert len(parse_search_payload(json.dumps(TAVILY_PAYLOAD))) == 1

    def test_error_payload(self):
        with pytest.raises(SearchClientError, match="Invalid API key"):
            parse_search_payload({"error": "Invalid API key"})

    def test_non_json_string(self):
        with pytest.raises(SearchClientError):
            parse_search_payload("Rate limit exceeded")

    def test_unknown_shape(self):
        with pytest.raises(SearchClientError):
            parse_search_payload({"answer": "no results key"})
