"""Room-scoped fan-out of outbound events.

Delivery is best effort: every recipient gets its own emit call, and a failure
for one session is logged and skipped so the rest of the room still receives
the event.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional

from .events import Outbound
from .rooms import RoomDirectory

logger = logging.getLogger(__name__)

Emitter = Callable[..., Any]


class Broadcaster:
    def __init__(self, rooms: RoomDirectory, emit: Emitter) -> None:
        self.rooms = rooms
        self._emit = emit

    def to_room(self, topic: str, event: str, payload: dict, exclude_sid: Optional[str] = None) -> List[str]:
        """Send ``event`` to every member of ``topic`` except ``exclude_sid``. Returns the sids reached."""
        delivered: List[str] = []
        # Snapshot: a disconnect during fan-out must not mutate what we iterate over
        for sid in sorted(self.rooms.members_of(topic)):
            if exclude_sid is not None and sid == exclude_sid:
                continue
            if self._send(sid, event, payload):
                delivered.append(sid)
        return delivered

    def to_session(self, sid: str, event: str, payload: dict) -> bool:
        return self._send(sid, event, payload)

    def deliver(self, outbound: Iterable[Outbound]) -> None:
        for item in outbound:
            if item.to is not None:
                self.to_session(item.to, item.event, item.payload)
            elif item.topic is not None:
                self.to_room(item.topic, item.event, item.payload, exclude_sid=item.exclude)

    def _send(self, sid: str, event: str, payload: dict) -> bool:
        try:
            self._emit(event, payload, to=sid)
            return True
        except Exception as exc:  # noqa
            logger.warning("Delivery of %s to %s failed: %s", event, sid, exc)
            return False
