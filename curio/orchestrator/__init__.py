"""
Curio Orchestrator Module

LangGraph pipeline that turns a learning request into a persisted lesson plan:
query formulation, web search, LLM curation and persistence.
"""

from .graph import create_lesson_planner_graph, run_lesson_planner
from .nodes import build_search_query, call_search, curate_with_llm, formulate_query, save_plan
from .parsers import parse_curated_plan
from .state import LessonPlannerState

__all__ = [
    "create_lesson_planner_graph",
    "run_lesson_planner",
    "build_search_query",
    "call_search",
    "curate_with_llm",
    "formulate_query",
    "save_plan",
    "parse_curated_plan",
    "LessonPlannerState",
]
