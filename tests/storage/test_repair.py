"""
Tests for storage/repair.py - Orphaned lesson plan reconciliation
"""
import pytest

from curio.storage.repair import reconcile_orphaned_plans
from curio.storage.schemas import CuratedResource, LessonPlan, RequestStatus


def make_plan(learning_request_id, title="Docs"):
    return LessonPlan(
        learning_request_id=learning_request_id,
        resources=[CuratedResource(title=title, url="https://example.com", summary="Start here")],
    )


class TestReconcileOrphanedPlans:

    @pytest.mark.asyncio
    async def test_attaches_orphaned_plan(self, store, sample_request):
        request = await store.learning_requests.create(sample_request)
        plan = await store.lesson_plans.create(make_plan(request.id))

        repaired = await reconcile_orphaned_plans(store)

        assert repaired == [request.id]
        stored = await store.learning_requests.get(request.id)
        assert stored.status == RequestStatus.COMPLETED
        assert stored.lesson_plan_id == plan.id

    @pytest.mark.asyncio
    async def test_newest_plan_wins(self, store, sample_request):
        request = await store.learning_requests.create(sample_request)
        await store.lesson_plans.create(make_plan(request.id, "Old"))
        newest = await store.lesson_plans.create(make_plan(request.id, "New"))

        await reconcile_orphaned_plans(store)

        assert (await store.learning_requests.get(request.id)).lesson_plan_id == newest.id

    @pytest.mark.asyncio
    async def test_is_idempotent(self, store, sample_request):
        request = await store.learning_requests.create(sample_request)
        await store.lesson_plans.create(make_plan(request.id))

        await reconcile_orphaned_plans(store)

        assert await reconcile_orphaned_plans(store) == []

    @pytest.mark.asyncio
    async def test_requests_without_plans_are_untouched(self, store, sample_request):
        request = await store.learning_requests.create(sample_request)

        assert await reconcile_orphaned_plans(store) == []
        assert (await store.learning_requests.get(request.id)).status == RequestStatus.PENDING
