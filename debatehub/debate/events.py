from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Outbound event names
RECEIVE_MESSAGE = "receiveMessage"
RECEIVE_VOICE_MESSAGE = "receiveVoiceMessage"
POLL_UPDATE = "pollUpdate"
FACT_CHECK_RESULT = "factCheckResult"
DEBATE_ERROR = "debateError"


class _Action(BaseModel):
    """Base for inbound participant actions; ``sid`` is filled in from the transport."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sid: str


def _required_text(value: Any) -> str:
    cleaned = (value or "").strip() if isinstance(value, str) else ""
    if not cleaned:
        raise ValueError("must be a non-empty string")
    return cleaned


class Join(_Action):
    topic: str

    @field_validator("topic", mode="before")
    @classmethod
    def _ensure_topic(cls, value: Any) -> str:
        return _required_text(value)


class SendMessage(_Action):
    text: str
    topic: str
    team: Optional[str] = None
    username: Optional[str] = None
    is_question: bool = Field(default=False, alias="isQuestion")
    is_answer: bool = Field(default=False, alias="isAnswer")

    @field_validator("text", "topic", mode="before")
    @classmethod
    def _ensure_text(cls, value: Any) -> str:
        return _required_text(value)

    @field_validator("is_question", "is_answer", mode="before")
    @classmethod
    def _truthy(cls, value: Any) -> bool:
        return bool(value)

    @property
    def spawns_poll(self) -> bool:
        return self.is_question or self.is_answer


class SendVoiceMessage(_Action):
    audio_url: str = Field(alias="audioUrl")
    topic: str
    team: Optional[str] = None
    username: Optional[str] = None

    @field_validator("audio_url", "topic", mode="before")
    @classmethod
    def _ensure_text(cls, value: Any) -> str:
        return _required_text(value)


class VotePoll(_Action):
    poll_id: str = Field(alias="pollId")
    vote: str
    username: str
    topic: str

    @field_validator("poll_id", "username", "topic", mode="before")
    @classmethod
    def _ensure_text(cls, value: Any) -> str:
        return _required_text(value)

    @field_validator("vote", mode="before")
    @classmethod
    def _normalize_vote(cls, value: Any) -> str:
        # Unknown choices pass through; the poll store ignores them
        return str(value or "").strip().lower()


class CheckFact(_Action):
    text: str

    @field_validator("text", mode="before")
    @classmethod
    def _ensure_text(cls, value: Any) -> str:
        return _required_text(value)


class Disconnect(_Action):
    pass


InboundAction = Union[Join, SendMessage, SendVoiceMessage, VotePoll, CheckFact, Disconnect]

# Socket.IO event name -> action model
INBOUND_EVENTS: Dict[str, Type[_Action]] = {
    "joinDebate": Join,
    "sendMessage": SendMessage,
    "sendVoiceMessage": SendVoiceMessage,
    "votePoll": VotePoll,
    "checkFact": CheckFact,
}


def parse_action(event: str, data: Any, sid: str) -> InboundAction:
    """Validate a raw Socket.IO payload into its action model.

    Raises ``KeyError`` for unknown events and ``pydantic.ValidationError`` for
    malformed payloads.
    """
    model = INBOUND_EVENTS[event]
    if model is Join and isinstance(data, str):
        # Clients emit the topic as a bare string
        data = {"topic": data}
    if not isinstance(data, dict):
        data = {}
    return model.model_validate({**data, "sid": sid})  # type: ignore[return-value]


@dataclass(frozen=True)
class Outbound:
    """One event to deliver: to a single session (``to``) or to a topic's room."""

    event: str
    payload: Dict[str, Any]
    topic: Optional[str] = None
    to: Optional[str] = None
    exclude: Optional[str] = None
