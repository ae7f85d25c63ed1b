"""
Subject identification dialogue.

A per-session state machine that turns free-text utterances into a fully
specified learning request:

    initial → identifying ─IDENTIFIED─────────────→ learning_preference ─PREFERENCE→ confirmed
                          ─CLARIFY→ clarifying ─RESOLVED (or fallback)→ ┘
                          ─anything else→ confirmed (no subject)

The states that consult the model make exactly one LLM call per turn;
``initial`` and ``confirmed`` make none. LLM errors propagate to the caller.
"""
import logging
from typing import Optional

from curio.core.llm_client import LanguageModelClient
from curio.storage.schemas import PREFERENCE_LABELS
from .parsing import parse_preference, parse_tagged_reply
from .prompts import (
    GREETING,
    format_clarification_question,
    format_confirmation,
    format_preference_question,
    format_preference_retry,
    format_unclear_subject,
    get_clarification_prompt,
    get_learning_preference_prompt,
    get_subject_identification_prompt,
)
from .session_store import SessionStore
from .state import ConversationState, DialogueStep, DialogueTurn, LearningRequestDraft

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "General"
DEFAULT_CANDIDATE_CATEGORIES = "multiple categories"


class DialogueEngine:
    """
    Drives one conversation turn at a time for any number of sessions.

    Turns for different session ids may run concurrently. Turns for the same
    session id must be serialized by the caller.
    """

    def __init__(self, llm_client: LanguageModelClient, sessions: Optional[SessionStore] = None):
        self.llm_client = llm_client
        self.sessions = sessions if sessions is not None else SessionStore()

    def get_state(self, session_id: str) -> ConversationState:
        return self.sessions.get(session_id).model_copy()

    async def handle_message(self, session_id: str, message: str) -> DialogueTurn:
        """
        Process one user utterance.

        Args:
            session_id: Opaque conversation id
            message: Free-text user message

        Returns:
            DialogueTurn with the reply text, the resulting state and, when the
            dialogue just completed, the learning request draft to persist
        """
        state = self.sessions.get(session_id)
        message = message.strip()

        # The UI opens with the greeting, so the first message is already a subject
        if state.step == DialogueStep.INITIAL:
            state = state.model_copy(update={"step": DialogueStep.IDENTIFYING})

        if state.step == DialogueStep.IDENTIFYING:
            return await self._identify(session_id, state, message)
        if state.step == DialogueStep.CLARIFYING:
            return await self._clarify(session_id, state, message)
        if state.step == DialogueStep.LEARNING_PREFERENCE:
            return await self._capture_preference(session_id, state, message)
        return self._restart(session_id)

    async def _identify(self, session_id: str, state: ConversationState, message: str) -> DialogueTurn:
        content = await self.llm_client.complete(get_subject_identification_prompt(message))
        reply = parse_tagged_reply(content, ("IDENTIFIED", "CLARIFY"))

        if reply is not None and reply.tag == "IDENTIFIED":
            return self._ask_preference(session_id, state, reply.value, reply.detail or DEFAULT_CATEGORY)

        if reply is not None and reply.tag == "CLARIFY":
            candidate_categories = reply.detail or DEFAULT_CANDIDATE_CATEGORIES
            new_state = state.model_copy(update={
                "step": DialogueStep.CLARIFYING,
                "subject_candidate": reply.value,
                "needs_clarification": True,
                "clarification_context": candidate_categories,
            })
            logger.info(f"[{session_id}] '{reply.value}' is ambiguous: {candidate_categories}")
            return self._turn(session_id, new_state, format_clarification_question(reply.value, candidate_categories))

        logger.info(f"[{session_id}] could not identify a subject")
        new_state = state.model_copy(update={"step": DialogueStep.CONFIRMED})
        return self._turn(session_id, new_state, format_unclear_subject())

    async def _clarify(self, session_id: str, state: ConversationState, message: str) -> DialogueTurn:
        candidate = state.subject_candidate or message
        candidate_categories = state.clarification_context or DEFAULT_CANDIDATE_CATEGORIES
        content = await self.llm_client.complete(
            get_clarification_prompt(candidate, candidate_categories, message)
        )
        reply = parse_tagged_reply(content, "RESOLVED")

        if reply is not None:
            return self._ask_preference(
                session_id, state, reply.value, reply.detail or DEFAULT_CATEGORY, lead="Perfect! I identified"
            )

        logger.info(f"[{session_id}] clarification unresolved, accepting '{candidate}' as-is")
        return self._ask_preference(session_id, state, candidate, DEFAULT_CATEGORY, lead="I'll go with")

    async def _capture_preference(self, session_id: str, state: ConversationState, message: str) -> DialogueTurn:
        content = await self.llm_client.complete(get_learning_preference_prompt(state.subject or "", message))
        preference = parse_preference(content)

        if preference is None:
            return self._turn(session_id, state, format_preference_retry())

        new_state = state.model_copy(update={
            "step": DialogueStep.CONFIRMED,
            "learning_preference": preference,
        })
        draft = LearningRequestDraft(
            subject=new_state.subject,
            category=new_state.category or DEFAULT_CATEGORY,
            learning_preference=preference,
        )
        logger.info(f"[{session_id}] learning request ready: {draft.subject} / {draft.category} / {preference.value}")
        response = format_confirmation(draft.subject, draft.category, PREFERENCE_LABELS[preference])
        return self._turn(session_id, new_state, response, completed_request=draft)

    def _restart(self, session_id: str) -> DialogueTurn:
        return self._turn(session_id, ConversationState(step=DialogueStep.IDENTIFYING), GREETING)

    def _ask_preference(
        self,
        session_id: str,
        state: ConversationState,
        subject: str,
        category: str,
        lead: str = "I identified"
    ) -> DialogueTurn:
        new_state = state.model_copy(update={
            "step": DialogueStep.LEARNING_PREFERENCE,
            "subject": subject,
            "category": category,
            "needs_clarification": False,
        })
        return self._turn(session_id, new_state, format_preference_question(subject, category, lead=lead))

    def _turn(
        self,
        session_id: str,
        state: ConversationState,
        response: str,
        completed_request: Optional[LearningRequestDraft] = None
    ) -> DialogueTurn:
        self.sessions.set(session_id, state)
        return DialogueTurn(response=response, state=state.model_copy(), completed_request=completed_request)
