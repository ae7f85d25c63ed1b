"""
Curio Dialogue Module

Multi-turn subject identification: figures out what the user wants to learn,
asks for clarification when the subject is ambiguous and captures how deep
they want to go.
"""

from .engine import DialogueEngine
from .session_store import SessionStore
from .state import ConversationState, DialogueStep, DialogueTurn, LearningRequestDraft

__all__ = [
    "DialogueEngine",
    "SessionStore",
    "ConversationState",
    "DialogueStep",
    "DialogueTurn",
    "LearningRequestDraft",
]
