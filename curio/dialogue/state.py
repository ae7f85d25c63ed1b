from enum import Enum
from typing import Optional

from pydantic import BaseModel

from curio.storage.schemas import LearningPreference


class DialogueStep(str, Enum):
    INITIAL = "initial"
    IDENTIFYING = "identifying"
    CLARIFYING = "clarifying"
    LEARNING_PREFERENCE = "learning_preference"
    CONFIRMED = "confirmed"


class ConversationState(BaseModel):
    """Per-session dialogue state. Lives in memory only."""
    step: DialogueStep = DialogueStep.INITIAL
    subject_candidate: Optional[str] = None
    subject: Optional[str] = None
    category: Optional[str] = None
    learning_preference: Optional[LearningPreference] = None
    needs_clarification: bool = False
    clarification_context: Optional[str] = None  # candidate categories for subject_candidate


class LearningRequestDraft(BaseModel):
    """Fully specified learning intent, ready to be persisted as a LearningRequest."""
    subject: str
    category: str
    learning_preference: LearningPreference


class DialogueTurn(BaseModel):
    """Result of one engine invocation."""
    response: str
    state: ConversationState
    completed_request: Optional[LearningRequestDraft] = None
