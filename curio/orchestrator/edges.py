from typing import Literal

from langgraph.graph import END

from .state import LessonPlannerState


def route_after_search(state: LessonPlannerState) -> Literal["curate_with_llm", "__end__"]:
    """Stop the pipeline once the search stage has recorded an error."""
    if state.get("error"):
        return END
    return "curate_with_llm"


def route_after_curation(state: LessonPlannerState) -> Literal["save_plan", "__end__"]:
    """Skip persistence when curation failed or produced nothing."""
    if state.get("error"):
        return END
    return "save_plan"
