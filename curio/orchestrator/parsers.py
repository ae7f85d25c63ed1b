"""
Parsing and validation of the curated resource list returned by the LLM.

The model is asked for a bare JSON array of {title, url, summary} objects.
Any deviation rejects the whole list; a partial plan is never returned.
"""
import json
import logging
from typing import List

from pydantic import ValidationError

from curio.core.errors import CurationError
from curio.core.llm_utils import strip_code_fence
from curio.storage.schemas import CuratedResource

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("title", "url", "summary")


def parse_curated_plan(text: str) -> List[CuratedResource]:
    """
    Parse the model's curation reply.

    Args:
        text: Raw model output, optionally wrapped in a ```json fence

    Returns:
        Curated resources in the order the model ranked them

    Raises:
        CurationError: not JSON, not an array, or any element invalid
    """
    cleaned = strip_code_fence(text)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise CurationError(f"Response is not valid JSON: {e}") from e

    if not isinstance(parsed, list):
        raise CurationError("LLM response is not an array")

    resources = []
    for index, item in enumerate(parsed):
        if not isinstance(item, dict):
            raise CurationError(f"Resource {index} is not an object")
        missing = [key for key in REQUIRED_KEYS if not isinstance(item.get(key), str) or not item[key].strip()]
        if missing:
            raise CurationError(f"Resource {index} missing required fields: {', '.join(missing)}")
        try:
            resources.append(CuratedResource(**{key: item[key] for key in REQUIRED_KEYS}))
        except ValidationError as e:
            raise CurationError(f"Resource {index} is invalid: {e.errors()[0]['msg']}") from e
    return resources
