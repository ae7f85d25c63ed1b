"""
Curio Storage Module

This module provides:
- Record schemas (learning requests, lesson plans, content items)
- A JSON-file document store with per-collection CRUD
- A repair pass for lesson plans whose request update was lost
"""

from .document_store import DocumentCollection, DocumentStore, initialize_store
from .repair import reconcile_orphaned_plans
from .schemas import (
    ContentItem,
    ContentStatus,
    CuratedResource,
    LearningPreference,
    LearningRequest,
    LessonPlan,
    RequestStatus,
)

__all__ = [
    "DocumentCollection",
    "DocumentStore",
    "initialize_store",
    "reconcile_orphaned_plans",
    "ContentItem",
    "ContentStatus",
    "CuratedResource",
    "LearningPreference",
    "LearningRequest",
    "LessonPlan",
    "RequestStatus",
]
