"""
Exception types shared across Curio.

Remote-call and validation failures inside the lesson plan pipeline are caught
and recorded in the pipeline state; persistence failures propagate so the UI
can offer an explicit retry.
"""


class CurioError(Exception):
    """Base class for all Curio errors."""


class ConfigurationError(CurioError):
    """A required setting or API key is missing or invalid."""


class LLMClientError(CurioError):
    """The language model call failed (network, auth, rate limit)."""


class SearchClientError(CurioError):
    """The web search call failed or returned an unusable payload."""


class CurationError(CurioError):
    """The curated resource list returned by the LLM failed validation."""


class PersistenceError(CurioError):
    """A document store read or write failed."""


class RecordNotFoundError(PersistenceError):
    """No record exists for the requested id."""

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"{collection}: no record with id '{record_id}'")
        self.collection = collection
        self.record_id = record_id


class LessonPlanInProgressError(CurioError):
    """A lesson plan is already being generated for this learning request."""
