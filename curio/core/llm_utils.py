"""
Shared LLM utilities for reading chat model responses.

Handles the response shapes returned by different providers (Gemini returns
lists of content blocks) and the Markdown fences models like to wrap JSON in.
"""
import re

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")


def extract_content_as_string(response) -> str:
    """
    Safely extract content from an LLM response as a string.

    Handles cases where response.content might be:
    - A string (most common)
    - A list of content blocks (e.g., Google Gemini returns [{'type': 'text', 'text': '...'}])
    - A dict content block

    Args:
        response: LLM response object (with .content) or raw content

    Returns:
        Content as a plain string
    """
    content = response.content if hasattr(response, "content") else response
    return normalize_content_to_string(content)


def normalize_content_to_string(content) -> str:
    """Normalize string, content-block list or content-block dict to plain text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        text_parts = []
        for item in content:
            if isinstance(item, dict):
                text_parts.append(_block_text(item))
            elif isinstance(item, str):
                text_parts.append(item)
            elif item is not None:
                text_parts.append(str(item))
        return " ".join(text_parts)
    if isinstance(content, dict):
        return _block_text(content)
    return str(content) if content else ""


def _block_text(block: dict) -> str:
    if "text" in block:
        return block["text"]
    if "content" in block:
        return block["content"]
    return str(block)


def strip_code_fence(text: str) -> str:
    """
    Remove a Markdown code fence wrapping the whole response.

    Accepts both ```json ... ``` and bare ``` ... ``` fences. Text that does
    not start with a fence is only trimmed.

    Args:
        text: Raw model output

    Returns:
        The fenced body, or the trimmed input when no fence is present
    """
    cleaned = text.strip()
    if not cleaned.startswith("```"):
        return cleaned
    cleaned = _FENCE_OPEN.sub("", cleaned, count=1)
    return _FENCE_CLOSE.sub("", cleaned, count=1).strip()
