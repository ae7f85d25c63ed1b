"""
Parsing of the tagged one-line replies the dialogue prompts ask for.

Every prompt expects ``TAG: value | detail``. One validator handles all of
them; any deviation (missing tag, empty value, unknown preference) yields
``None`` and the caller takes its single fallback path.
"""
import logging
from typing import Iterable, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from curio.storage.schemas import LearningPreference

logger = logging.getLogger(__name__)

_DECORATION = "\"'`*.[]"


class TaggedReply(BaseModel):
    tag: str
    value: str = Field(min_length=1)
    detail: Optional[str] = None

    @field_validator("value")
    @classmethod
    def _strip_value(cls, value: str) -> str:
        value = value.strip().strip(_DECORATION).strip()
        if not value:
            raise ValueError("empty value")
        return value

    @field_validator("detail")
    @classmethod
    def _strip_detail(cls, detail: Optional[str]) -> Optional[str]:
        if detail is None:
            return None
        detail = detail.strip().strip(_DECORATION).strip()
        return detail or None


def parse_tagged_reply(text: str, tags: Union[str, Iterable[str]]) -> Optional[TaggedReply]:
    """
    Find the first line of ``text`` that starts with one of ``tags``.

    Args:
        text: Raw model output
        tags: Accepted tag name(s), without the trailing colon

    Returns:
        The validated reply, or None if no line matches
    """
    accepted = (tags,) if isinstance(tags, str) else tuple(tags)
    for raw_line in (text or "").splitlines():
        line = raw_line.strip().strip(_DECORATION).strip()
        for tag in accepted:
            prefix = f"{tag}:"
            if not line.upper().startswith(prefix):
                continue
            body = line[len(prefix):]
            value, sep, detail = body.partition("|")
            try:
                return TaggedReply(tag=tag, value=value, detail=detail if sep else None)
            except ValidationError:
                logger.debug(f"Rejected {tag} reply: {raw_line!r}")
                return None
    return None


def parse_preference(text: str) -> Optional[LearningPreference]:
    """Map a ``PREFERENCE: <value>`` reply onto a LearningPreference."""
    reply = parse_tagged_reply(text, "PREFERENCE")
    if reply is None:
        return None
    normalized = reply.value.lower().replace("-", "_").replace(" ", "_")
    try:
        return LearningPreference(normalized)
    except ValueError:
        logger.debug(f"Unknown learning preference: {reply.value!r}")
        return None
