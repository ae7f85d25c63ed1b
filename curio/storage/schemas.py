"""
Pydantic models for the records Curio persists.

Provides type-safe models for learning requests, lesson plans, curated
resources and content items. Every stored record carries an id plus
created_at/updated_at ISO-8601 timestamps.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


def utc_now() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).isoformat()


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex}"


class LearningPreference(str, Enum):
    """How deep the user wants to go into a subject."""
    BASICS = "basics"
    GETTING_STARTED = "getting_started"
    CORE_CONCEPTS = "core_concepts"


PREFERENCE_LABELS = {
    LearningPreference.BASICS: "just the basics",
    LearningPreference.GETTING_STARTED: "how to get started quickly",
    LearningPreference.CORE_CONCEPTS: "core concepts",
}


class RequestStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"


class ContentStatus(str, Enum):
    INBOX = "inbox"
    ACTIVE = "active"
    COMPLETED = "completed"


class BaseRecord(BaseModel):
    """Fields shared by every stored record."""
    id: str
    created_at: str = ""
    updated_at: str = ""


class CuratedResource(BaseModel):
    """A single recommended link with a one-sentence rationale."""
    title: str = Field(min_length=1)
    url: str = Field(min_length=1)
    summary: str = Field(min_length=1)

    @field_validator("title", "summary")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("url")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        value = value.strip()
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"not an absolute http(s) URL: {value!r}")
        return value


class LearningRequest(BaseRecord):
    """A user's captured intent to learn a subject."""
    id: str = Field(default_factory=lambda: new_id("learning-request"))
    subject: str
    category: str
    learning_preference: LearningPreference
    status: RequestStatus = RequestStatus.PENDING
    lesson_plan_id: Optional[str] = None


class LessonPlan(BaseRecord):
    """The curated, persisted set of resources generated for a learning request."""
    id: str = Field(default_factory=lambda: new_id("lesson-plan"))
    learning_request_id: str
    resources: List[CuratedResource] = Field(default_factory=list)


class ContentItem(BaseRecord):
    """A saved article, video or other piece of learning content."""
    id: str = Field(default_factory=lambda: new_id("content"))
    title: str
    description: str = ""
    url: Optional[str] = None
    category_ids: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    priority: Optional[int] = None
    status: ContentStatus = ContentStatus.INBOX
