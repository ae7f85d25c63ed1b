import logging
from functools import partial
from typing import Any, Dict, Optional

from langgraph.graph import START, END, StateGraph

from curio.core.llm_client import LanguageModelClient
from curio.storage.document_store import DocumentStore
from curio.storage.schemas import LearningRequest
from curio.tools.web_tools import SearchClient
from .edges import route_after_curation, route_after_search
from .nodes import call_search, curate_with_llm, formulate_query, save_plan
from .state import LessonPlannerState, initial_state

logger = logging.getLogger(__name__)

# CompiledGraph is the return type of StateGraph.compile()
CompiledGraph = Any


def create_lesson_planner_graph(
    search_client: SearchClient,
    llm_client: LanguageModelClient,
    store: DocumentStore,
    max_results: Optional[int] = None
) -> CompiledGraph:
    """
    Create the lesson plan pipeline.

    formulate_query → call_search → curate_with_llm → save_plan

    A stage that records an error ends the run; later stages are skipped and
    the final state still carries ``curated_plan`` (empty) and ``error``.

    Args:
        search_client: Web search backend
        llm_client: Model used for curation
        store: Document store receiving the lesson plan
        max_results: Search result cap (default: MAX_WEB_RESULTS)

    Returns:
        Compiled pipeline graph
    """
    graph_builder = StateGraph(LessonPlannerState)

    graph_builder.add_node("formulate_query", formulate_query)
    graph_builder.add_node("call_search", partial(call_search, search_client=search_client, max_results=max_results))
    graph_builder.add_node("curate_with_llm", partial(curate_with_llm, llm_client=llm_client))
    graph_builder.add_node("save_plan", partial(save_plan, store=store))

    graph_builder.add_edge(START, "formulate_query")
    graph_builder.add_edge("formulate_query", "call_search")
    graph_builder.add_conditional_edges(
        "call_search", route_after_search, {"curate_with_llm": "curate_with_llm", END: END}
    )
    graph_builder.add_conditional_edges(
        "curate_with_llm", route_after_curation, {"save_plan": "save_plan", END: END}
    )
    graph_builder.add_edge("save_plan", END)

    lesson_planner = graph_builder.compile()
    logger.info("Lesson planner graph compiled")
    return lesson_planner


async def run_lesson_planner(graph: CompiledGraph, learning_request: LearningRequest) -> Dict[str, Any]:
    """
    Run the pipeline once for an already persisted learning request.

    Returns:
        Final state: ``curated_plan`` is non-empty on success, otherwise
        ``error`` describes the first failing stage

    Raises:
        PersistenceError: the lesson plan or request update could not be written
    """
    return await graph.ainvoke(initial_state(learning_request))
