"""Event-driven core for debate rooms.

``Coordinator.dispatch`` consumes one inbound action, mutates the shared state
(sessions, rooms, polls) and returns the outbound events it produced. It never
talks to the transport itself, which keeps it testable without Socket.IO.

Every state mutation runs under one lock and never waits on I/O. The
fact-check path only reads its request and produces a private reply, so a slow
gateway call cannot interleave with room or poll updates.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from .events import (
    FACT_CHECK_RESULT,
    POLL_UPDATE,
    RECEIVE_MESSAGE,
    RECEIVE_VOICE_MESSAGE,
    CheckFact,
    Disconnect,
    InboundAction,
    Join,
    Outbound,
    SendMessage,
    SendVoiceMessage,
    VotePoll,
)
from .polls import PollStore
from .rooms import RoomDirectory
from .sessions import SessionRegistry

logger = logging.getLogger(__name__)

FACT_CHECK_FALLBACK = "Sorry, there was an error processing your request."


def local_timestamp(now: Optional[datetime] = None) -> str:
    """Human readable local wall-clock time, e.g. ``3:04:05 PM``."""
    now = now or datetime.now()
    return now.strftime("%I:%M:%S %p").lstrip("0")


@dataclass
class DebateState:
    sessions: SessionRegistry = field(default_factory=SessionRegistry)
    rooms: RoomDirectory = field(default_factory=RoomDirectory)
    polls: PollStore = field(default_factory=PollStore)


class Coordinator:
    def __init__(
        self,
        state: Optional[DebateState] = None,
        fact_checker=None,
        *,
        voice_exclude_sender: bool = True,
        clock: Callable[[], str] = local_timestamp,
    ) -> None:
        self.state = state or DebateState()
        self.fact_checker = fact_checker
        self.voice_exclude_sender = voice_exclude_sender
        self._clock = clock
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    def connect(self, sid: str) -> None:
        with self._lock:
            self.state.sessions.register(sid)

    def dispatch(self, action: InboundAction) -> List[Outbound]:
        if isinstance(action, CheckFact):
            # Runs outside the lock: may block on the external gateway
            return self._check_fact(action)
        with self._lock:
            if isinstance(action, Join):
                return self._join(action)
            if isinstance(action, SendMessage):
                return self._send_message(action)
            if isinstance(action, SendVoiceMessage):
                return self._send_voice(action)
            if isinstance(action, VotePoll):
                return self._vote(action)
            if isinstance(action, Disconnect):
                return self._disconnect(action)
        raise TypeError(f"Unsupported action: {type(action).__name__}")

    # ------------------------------------------------------------------
    def _join(self, action: Join) -> List[Outbound]:
        self.state.sessions.note_topic(action.sid, action.topic)
        if self.state.rooms.join(action.topic, action.sid):
            logger.info("Session %s joined debate: %s", action.sid, action.topic)
        return []

    def _send_message(self, action: SendMessage) -> List[Outbound]:
        self.state.sessions.note_name(action.sid, action.username)
        poll_id = None
        if action.spawns_poll:
            kind = "question" if action.is_question else "answer"
            poll_id = self.state.polls.create(action.text, kind, action.username)
        payload = {
            "text": action.text,
            "team": action.team,
            "username": action.username,
            "timestamp": self._clock(),
            "isQuestion": action.is_question,
            "isAnswer": action.is_answer,
            "pollId": poll_id,
        }
        return [Outbound(RECEIVE_MESSAGE, payload, topic=action.topic)]

    def _send_voice(self, action: SendVoiceMessage) -> List[Outbound]:
        self.state.sessions.note_name(action.sid, action.username)
        payload = {
            "audioUrl": action.audio_url,
            "team": action.team,
            "username": action.username,
            "timestamp": self._clock(),
        }
        exclude = action.sid if self.voice_exclude_sender else None
        return [Outbound(RECEIVE_VOICE_MESSAGE, payload, topic=action.topic, exclude=exclude)]

    def _vote(self, action: VotePoll) -> List[Outbound]:
        result = self.state.polls.vote(action.poll_id, action.username, action.vote)
        if result is None:
            return []
        logger.info(
            "Vote %s by %s on %s (total %d)", action.vote, action.username, action.poll_id, result.total_votes
        )
        return [Outbound(POLL_UPDATE, result.to_payload(), topic=action.topic)]

    def _check_fact(self, action: CheckFact) -> List[Outbound]:
        logger.info("Fact check requested by %s", action.sid)
        try:
            if self.fact_checker is None:
                raise RuntimeError("No fact checker configured")
            result = self.fact_checker.check(action.text)
        except Exception as exc:
            logger.error("Error in checkFact handler: %s", exc)
            result = FACT_CHECK_FALLBACK
        payload = {"original": action.text, "result": result, "timestamp": self._clock()}
        return [Outbound(FACT_CHECK_RESULT, payload, to=action.sid)]

    def _disconnect(self, action: Disconnect) -> List[Outbound]:
        joined = self.state.sessions.unregister(action.sid)
        left = self.state.rooms.leave_all(action.sid, joined)
        # A session that raced its connect event may be missing from the registry
        left += self.state.rooms.leave_all(action.sid)
        logger.info("Session %s disconnected (rooms left: %s)", action.sid, sorted(left))
        return []
