"""
Connected participant bookkeeping.

One record per live Socket.IO connection, keyed by the transport-assigned sid.
The registry only remembers which topics a session asked to join so that the
room directory can be cleaned up on disconnect; the room directory stays the
single source of truth for membership.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, Optional, Set


@dataclass
class Session:
    sid: str
    display_name: Optional[str] = None
    topics: Set[str] = field(default_factory=set)
    connected_at: float = field(default_factory=time.time)


class SessionRegistry:
    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}

    def register(self, sid: str) -> Session:
        session = Session(sid=sid)
        self._sessions[sid] = session
        return session

    def get(self, sid: str) -> Optional[Session]:
        return self._sessions.get(sid)

    def note_topic(self, sid: str, topic: str) -> None:
        # Sessions that raced their own connect event are registered lazily
        session = self._sessions.get(sid) or self.register(sid)
        session.topics.add(topic)

    def note_name(self, sid: str, display_name: Optional[str]) -> None:
        session = self._sessions.get(sid)
        if session is not None and display_name:
            session.display_name = display_name

    def unregister(self, sid: str) -> Set[str]:
        """Drop the session and return the topics it had joined."""
        session = self._sessions.pop(sid, None)
        if session is None:
            return set()
        return set(session.topics)

    def __contains__(self, sid: object) -> bool:
        return sid in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
