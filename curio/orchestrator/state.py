from typing import Any, Dict, List, TypedDict

from curio.storage.schemas import CuratedResource, LearningRequest


class LessonPlannerState(TypedDict, total=False):
    """State threaded through the lesson plan pipeline. Every stage returns a partial update."""
    learning_request: LearningRequest
    search_query: str
    search_results: List[Dict[str, Any]]
    curated_plan: List[CuratedResource]
    error: str


def initial_state(learning_request: LearningRequest) -> LessonPlannerState:
    return {
        "learning_request": learning_request,
        "search_query": "",
        "search_results": [],
        "curated_plan": [],
        "error": "",
    }
