"""
Utility functions for formatting learning requests and lesson plans for display in the Gradio UI.
"""
from typing import List, Optional, Tuple

from curio.storage.schemas import PREFERENCE_LABELS, LearningRequest, LessonPlan, RequestStatus


def format_request_label(request: LearningRequest) -> str:
    """Dropdown label for a learning request."""
    marker = "✅" if request.status == RequestStatus.COMPLETED and request.lesson_plan_id else "🕓"
    return f"{marker} {request.subject} ({request.category})"


def format_request_choices(requests: List[LearningRequest]) -> List[Tuple[str, str]]:
    return [(format_request_label(r), r.id) for r in requests]


def format_lesson_plan_markdown(request: Optional[LearningRequest], plan: Optional[LessonPlan]) -> str:
    """
    Render a learning request and its lesson plan as markdown.

    Args:
        request: Selected learning request (None when nothing is selected)
        plan: Its lesson plan, if one has been generated

    Returns:
        Markdown text
    """
    if request is None:
        return "*Select a topic to see its lesson plan.*"

    header = (
        f"## {request.subject}\n"
        f"*{request.category} · {PREFERENCE_LABELS[request.learning_preference]}*\n\n"
    )
    if plan is None:
        return header + "No lesson plan yet. Click **Generate lesson plan** to create one."
    if not plan.resources:
        return header + "This lesson plan has no resources left."

    lines = [header + f"{len(plan.resources)} curated resources\n"]
    for index, resource in enumerate(plan.resources, start=1):
        lines.append(f"{index}. **[{resource.title}]({resource.url})**  \n   {resource.summary}")
    return "\n".join(lines)
