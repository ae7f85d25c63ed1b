import logging
from typing import Any, Dict, Optional

from curio.core.errors import CurationError
from curio.core.llm_client import LanguageModelClient
from curio.storage.document_store import DocumentStore
from curio.storage.schemas import LessonPlan, RequestStatus
from curio.tools.web_tools import SearchClient
from .parsers import parse_curated_plan
from .prompts import get_curation_prompt
from .state import LessonPlannerState

logger = logging.getLogger(__name__)


def build_search_query(subject: str, category: str, learning_preference: str) -> str:
    return f"tutorial for {learning_preference} of {subject} in {category}"


async def formulate_query(state: LessonPlannerState) -> Dict[str, Any]:
    logger.info("--- formulating search query ---")
    request = state["learning_request"]
    search_query = build_search_query(request.subject, request.category, request.learning_preference.value)
    logger.info(f"Generated search query: {search_query}")
    return {"search_query": search_query}


async def call_search(
    state: LessonPlannerState,
    search_client: SearchClient,
    max_results: Optional[int] = None
) -> Dict[str, Any]:
    """Run the web search. Failures are recorded in ``error``, never raised."""
    logger.info("--- calling web search ---")
    try:
        search_results = await search_client.search(state["search_query"], max_results)
    except Exception as e:
        logger.error(f"Web search failed: {e}")
        return {"error": f"Web search failed: {e}", "search_results": []}

    logger.info(f"Found {len(search_results)} search results")
    if search_results:
        first = search_results[0]
        logger.debug(f"First result: {first.get('title')} ({first.get('url')}, score={first.get('score')})")
    return {"search_results": search_results}


async def curate_with_llm(state: LessonPlannerState, llm_client: LanguageModelClient) -> Dict[str, Any]:
    """
    Ask the LLM to pick 3-5 resources from the search results.

    Empty results, LLM failures and malformed replies all degrade to an empty
    plan with an ``error``; this node never raises.
    """
    logger.info("--- curating with llm ---")
    search_results = state.get("search_results") or []
    if not search_results:
        logger.info("No search results to curate")
        return {"curated_plan": [], "error": "No search results available for curation"}

    request = state["learning_request"]
    prompt = get_curation_prompt(request.subject, request.learning_preference.value, search_results)
    logger.info(f"Asking LLM to curate {len(search_results)} search results for: {request.subject}")

    try:
        content = await llm_client.complete(prompt)
        curated_plan = parse_curated_plan(content)
    except CurationError as e:
        logger.error(f"Failed to parse LLM response as a resource list: {e}")
        return {"error": f"LLM curation failed: Failed to parse LLM response: {e}", "curated_plan": []}
    except Exception as e:
        logger.error(f"LLM curation failed: {e}")
        return {"error": f"LLM curation failed: {e}", "curated_plan": []}

    logger.info(f"Successfully curated {len(curated_plan)} resources")
    for index, resource in enumerate(curated_plan, start=1):
        logger.debug(f"{index}. {resource.title} ({resource.url})")
    return {"curated_plan": curated_plan}


async def save_plan(state: LessonPlannerState, store: DocumentStore) -> Dict[str, Any]:
    """
    Persist the lesson plan, then mark the learning request completed.

    The two writes are sequential and not transactional. A failure in either
    is raised as PersistenceError; a plan created before a failed request
    update is left for ``reconcile_orphaned_plans``.
    """
    logger.info("--- saving final plan ---")
    curated_plan = state.get("curated_plan") or []
    if not curated_plan:
        logger.info("No curated plan to save")
        return {"error": "No curated plan available to save"}

    request = state["learning_request"]
    saved_plan = await store.lesson_plans.create(
        LessonPlan(learning_request_id=request.id, resources=list(curated_plan))
    )
    logger.info(f"✅ Lesson plan saved: {saved_plan.id} ({len(saved_plan.resources)} resources)")

    updated_request = await store.learning_requests.update(request.model_copy(update={
        "status": RequestStatus.COMPLETED,
        "lesson_plan_id": saved_plan.id,
    }))

    logger.info(f"✅ Learning request {updated_request.id} completed")
    return {"learning_request": updated_request}
