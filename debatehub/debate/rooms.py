"""Topic name -> set of joined session ids.

Rooms are created lazily on the first join and removed as soon as their last
member leaves, so an empty room never lingers in the directory.
"""
from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, List, Set

logger = logging.getLogger(__name__)


class RoomDirectory:
    def __init__(self) -> None:
        self._rooms: Dict[str, Set[str]] = {}

    def join(self, topic: str, sid: str) -> bool:
        """Add ``sid`` to ``topic``. Returns False when it was already a member."""
        members = self._rooms.setdefault(topic, set())
        if sid in members:
            return False
        members.add(sid)
        logger.debug("Session %s joined room %s (members: %d)", sid, topic, len(members))
        return True

    def leave(self, topic: str, sid: str) -> bool:
        members = self._rooms.get(topic)
        if not members or sid not in members:
            return False
        members.discard(sid)
        if not members:
            del self._rooms[topic]
            logger.debug("Cleaned up empty room: %s", topic)
        return True

    def leave_all(self, sid: str, topics: Iterable[str] | None = None) -> List[str]:
        """Remove ``sid`` from every room (or only ``topics``) and return the rooms it left."""
        candidates = list(topics) if topics is not None else list(self._rooms.keys())
        left: List[str] = []
        for topic in candidates:
            if self.leave(topic, sid):
                left.append(topic)
        return left

    def members_of(self, topic: str) -> FrozenSet[str]:
        return frozenset(self._rooms.get(topic, ()))

    def topics(self) -> List[str]:
        return list(self._rooms.keys())

    def __contains__(self, topic: object) -> bool:
        return topic in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)
