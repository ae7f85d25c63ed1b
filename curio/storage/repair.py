"""
Reconciliation pass for interrupted lesson plan saves.

The pipeline creates the LessonPlan and then updates the LearningRequest in two
separate writes. If the second write fails the plan exists but the request is
still pending. This pass completes such requests; running it twice is a no-op.
"""
import logging
from typing import List

from curio.storage.document_store import DocumentStore
from curio.storage.schemas import RequestStatus

logger = logging.getLogger(__name__)


async def reconcile_orphaned_plans(store: DocumentStore) -> List[str]:
    """
    Attach orphaned lesson plans to the learning requests they point at.

    Args:
        store: Document store to repair

    Returns:
        Ids of the learning requests that were repaired
    """
    plans_by_request = {}
    for plan in await store.lesson_plans.get_all():
        # get_all is ordered by created_at, so the newest plan wins
        plans_by_request[plan.learning_request_id] = plan

    repaired = []
    for request in await store.learning_requests.get_all():
        if request.lesson_plan_id:
            continue
        plan = plans_by_request.get(request.id)
        if plan is None:
            continue
        await store.learning_requests.update(request.model_copy(update={
            "status": RequestStatus.COMPLETED,
            "lesson_plan_id": plan.id,
        }))
        logger.info(f"Repaired learning request {request.id} -> {plan.id}")
        repaired.append(request.id)
    return repaired
