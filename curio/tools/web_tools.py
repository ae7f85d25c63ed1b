from typing import Any, Callable, Dict, List, Optional
import json
import logging

from langchain_tavily import TavilySearch

from curio.config import settings as config
from curio.config.credentials import get_api_key
from curio.core.errors import ConfigurationError, SearchClientError

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 500


class SearchClient:
    """
    Web search through the Tavily API.

    The Tavily tool is rebuilt for each search so the API key is looked up per
    operation.

    Returns ranked results as dicts with ``title``, ``url``, ``content`` (a
    snippet) and ``score``.
    """

    def __init__(
        self,
        api_key_lookup: Callable[[str], Optional[str]] = get_api_key,
        search_depth: Optional[str] = None
    ):
        self._api_key_lookup = api_key_lookup
        self.search_depth = search_depth or getattr(config, 'TAVILY_SEARCH_DEPTH', 'basic')

    def is_available(self) -> bool:
        """Search is available once a Tavily API key can be resolved."""
        return bool(self._api_key_lookup("TAVILY_API_KEY"))

    def _create_tool(self, max_results: int) -> TavilySearch:
        api_key = self._api_key_lookup("TAVILY_API_KEY")
        if not api_key:
            raise ConfigurationError("TAVILY_API_KEY not set. Web search is unavailable.")
        return TavilySearch(
            max_results=max_results,
            search_depth=self.search_depth,
            tavily_api_key=api_key
        )

    async def search(self, query: str, max_results: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Search the web.

        Args:
            query: Search query
            max_results: Maximum results to return (default: MAX_WEB_RESULTS)

        Returns:
            List of search results with titles, URLs, snippets and scores

        Raises:
            SearchClientError: missing key, transport failure or unusable payload
        """
        max_results = max_results or getattr(config, 'MAX_WEB_RESULTS', 10)
        try:
            tool = self._create_tool(max_results)
            payload = await tool.ainvoke({"query": query})
        except ConfigurationError as e:
            raise SearchClientError(str(e)) from e
        except Exception as e:
            logger.error(f"Web search failed: {e}")
            raise SearchClientError(str(e)) from e

        results = parse_search_payload(payload)
        return results[:max_results]


def parse_search_payload(payload: Any) -> List[Dict[str, Any]]:
    """
    Normalize a Tavily payload into a list of result records.

    Accepts the dict returned by langchain-tavily (``{"results": [...]}``), a
    bare list of results, or either of those serialized as a JSON string.
    Entries without a URL are dropped.

    Raises:
        SearchClientError: the payload reports an error or has an unknown shape
    """
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise SearchClientError(f"Search returned non-JSON payload: {payload[:200]}") from e

    if isinstance(payload, dict):
        if payload.get("error"):
            raise SearchClientError(str(payload["error"]))
        raw_results = payload.get("results")
    else:
        raw_results = payload

    if not isinstance(raw_results, list):
        raise SearchClientError(f"Unexpected search payload type: {type(raw_results).__name__}")

    formatted_results = []
    for r in raw_results:
        if not isinstance(r, dict) or not r.get("url"):
            continue
        formatted_results.append({
            "title": r.get("title", ""),
            "url": r["url"],
            "content": (r.get("content") or "")[:SNIPPET_LENGTH],  # Limit snippet length
            "score": r.get("score", 0),
        })
    return formatted_results
