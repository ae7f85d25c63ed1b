"""
Application glue between the UI, the dialogue engine, the lesson plan
pipeline and the document store.

This is the caller both core subsystems expect: it serializes dialogue turns
per session, refuses a second pipeline run for a request that is already
being processed, and owns the cascading delete and resource edits the UI
performs on lesson plans.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Set

from curio.config import settings as config
from curio.core.errors import LessonPlanInProgressError, RecordNotFoundError
from curio.core.llm_client import LanguageModelClient
from curio.dialogue.engine import DialogueEngine
from curio.dialogue.session_store import SessionStore
from curio.dialogue.state import DialogueTurn
from curio.orchestrator.graph import CompiledGraph, create_lesson_planner_graph, run_lesson_planner
from curio.storage.document_store import DocumentStore
from curio.storage.repair import reconcile_orphaned_plans
from curio.storage.schemas import CuratedResource, LearningRequest, LessonPlan
from curio.tools.web_tools import SearchClient

logger = logging.getLogger(__name__)


class LearningService:

    def __init__(
        self,
        store: DocumentStore,
        llm_client: Optional[LanguageModelClient] = None,
        search_client: Optional[SearchClient] = None,
        sessions: Optional[SessionStore] = None,
        lesson_planner: Optional[CompiledGraph] = None
    ):
        self.store = store
        self.llm_client = llm_client or LanguageModelClient()
        self.search_client = search_client or SearchClient()
        self.dialogue = DialogueEngine(self.llm_client, sessions)
        self.lesson_planner = lesson_planner or create_lesson_planner_graph(
            self.search_client, self.llm_client, self.store
        )
        self._session_locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}
        self._in_flight: Set[str] = set()

    @asynccontextmanager
    async def _session_turn(self, session_id: str):
        """Serialize work on one session. The lock lives while anyone holds or waits for it."""
        lock = self._session_locks.get(session_id)
        if lock is None:
            lock = self._session_locks[session_id] = asyncio.Lock()
        self._lock_users[session_id] = self._lock_users.get(session_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[session_id] -= 1
            if not self._lock_users[session_id]:
                del self._lock_users[session_id]
            self._prune_session_locks()

    def _prune_session_locks(self) -> None:
        # Drop locks of sessions the store no longer holds and nobody is waiting on
        stale = [
            session_id for session_id in self._session_locks
            if session_id not in self._lock_users and not self.dialogue.sessions.has(session_id)
        ]
        for session_id in stale:
            del self._session_locks[session_id]

    async def send_message(self, session_id: str, message: str) -> Dict[str, Any]:
        """
        Run one dialogue turn and persist the learning request when it completes.

        Returns:
            Dict with ``response`` text, ``step`` and ``learning_request``
            (the stored record, or None while the dialogue is still running)
        """
        async with self._session_turn(session_id):
            turn: DialogueTurn = await self.dialogue.handle_message(session_id, message)
            learning_request = None
            if turn.completed_request is not None:
                draft = turn.completed_request
                learning_request = await self.store.learning_requests.create(LearningRequest(
                    subject=draft.subject,
                    category=draft.category,
                    learning_preference=draft.learning_preference,
                ))
                logger.info(f"Learning request {learning_request.id} created for session {session_id}")
        return {
            "response": turn.response,
            "step": turn.state.step.value,
            "learning_request": learning_request,
        }

    async def reset_session(self, session_id: str) -> None:
        """Forget the session's dialogue state once any running turn has finished."""
        async with self._session_turn(session_id):
            self.dialogue.sessions.reset(session_id)

    async def list_learning_requests(self) -> List[LearningRequest]:
        return await self.store.learning_requests.get_all()

    async def get_lesson_plan_for_request(self, learning_request_id: str) -> Optional[LessonPlan]:
        request = await self.store.learning_requests.get(learning_request_id)
        if request is not None and request.lesson_plan_id:
            plan = await self.store.lesson_plans.get(request.lesson_plan_id)
            if plan is not None:
                return plan
        plans = await self.store.get_lesson_plans_for_request(learning_request_id)
        return plans[-1] if plans else None

    async def generate_lesson_plan(self, learning_request_id: str) -> Dict[str, Any]:
        """
        Run the lesson plan pipeline for a stored learning request.

        Returns:
            Dict with ``curated_plan`` (list of resources), ``error`` (empty on
            success) and the final ``learning_request``

        Raises:
            RecordNotFoundError: unknown learning request
            LessonPlanInProgressError: a run for this request is already in flight
            PersistenceError: the plan or request update could not be written
        """
        if learning_request_id in self._in_flight:
            raise LessonPlanInProgressError(
                f"A lesson plan is already being generated for {learning_request_id}"
            )
        self._in_flight.add(learning_request_id)
        try:
            request = await self.store.learning_requests.get(learning_request_id)
            if request is None:
                raise RecordNotFoundError(config.LEARNING_REQUESTS_COLLECTION, learning_request_id)
            final_state = await run_lesson_planner(self.lesson_planner, request)
        finally:
            self._in_flight.discard(learning_request_id)

        return {
            "curated_plan": final_state.get("curated_plan", []),
            "error": final_state.get("error", ""),
            "learning_request": final_state.get("learning_request", request),
        }

    def is_generating(self, learning_request_id: str) -> bool:
        return learning_request_id in self._in_flight

    async def delete_learning_request(self, learning_request_id: str) -> None:
        """Delete a learning request together with every lesson plan that belongs to it."""
        for plan in await self.store.get_lesson_plans_for_request(learning_request_id):
            await self.store.lesson_plans.delete(plan.id)
            logger.info(f"Deleted lesson plan {plan.id}")
        await self.store.learning_requests.delete(learning_request_id)
        logger.info(f"Deleted learning request {learning_request_id}")

    async def remove_resource(self, lesson_plan_id: str, index: int) -> CuratedResource:
        """Remove one resource from a lesson plan and return it for a later undo."""
        plan = await self._get_plan(lesson_plan_id)
        if not 0 <= index < len(plan.resources):
            raise IndexError(f"Lesson plan {lesson_plan_id} has no resource at index {index}")
        resources = list(plan.resources)
        removed = resources.pop(index)
        await self.store.lesson_plans.update(plan.model_copy(update={"resources": resources}))
        return removed

    async def restore_resource(self, lesson_plan_id: str, index: int, resource: CuratedResource) -> LessonPlan:
        """Put a removed resource back, clamping the position to the current list."""
        plan = await self._get_plan(lesson_plan_id)
        resources = list(plan.resources)
        resources.insert(max(0, min(index, len(resources))), resource)
        return await self.store.lesson_plans.update(plan.model_copy(update={"resources": resources}))

    async def repair(self) -> List[str]:
        return await reconcile_orphaned_plans(self.store)

    async def _get_plan(self, lesson_plan_id: str) -> LessonPlan:
        # Always re-read so edits apply to the latest stored version
        plan = await self.store.lesson_plans.get(lesson_plan_id)
        if plan is None:
            raise RecordNotFoundError(config.LESSON_PLANS_COLLECTION, lesson_plan_id)
        return plan
