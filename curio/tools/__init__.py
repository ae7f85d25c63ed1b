"""
Curio Tools Module

- web_tools: Tavily-backed web search client
"""

from .web_tools import SearchClient, parse_search_payload

__all__ = ["SearchClient", "parse_search_payload"]
