"""In-memory poll / vote store.

A poll is spawned from a chat message flagged as a question or an answer and
stays open for voting for as long as it is kept in the store. Each voter name
counts at most once per poll, so ``valid + invalid`` always equals the number
of recorded voters.
"""
from __future__ import annotations

import itertools
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Optional, Set

logger = logging.getLogger(__name__)

VOTE_CHOICES = ("valid", "invalid")
POLL_KINDS = ("question", "answer")


@dataclass
class Poll:
    poll_id: str
    text: str
    kind: str
    author: Optional[str]
    votes: Dict[str, int] = field(default_factory=lambda: {"valid": 0, "invalid": 0})
    voters: Set[str] = field(default_factory=set)
    created_at: float = field(default_factory=time.time)

    @property
    def total_votes(self) -> int:
        return self.votes["valid"] + self.votes["invalid"]


@dataclass(frozen=True)
class VoteResult:
    poll_id: str
    votes: Dict[str, int]
    total_votes: int

    def to_payload(self) -> dict:
        return {"pollId": self.poll_id, "votes": dict(self.votes), "totalVotes": self.total_votes}


class PollStore:
    def __init__(self, max_polls: int = 0) -> None:
        self.max_polls = max(0, int(max_polls or 0))
        self._polls: "OrderedDict[str, Poll]" = OrderedDict()
        self._seq = itertools.count(1)

    def _next_id(self) -> str:
        # poll-<epoch ms>-<seq>: the sequence keeps ids distinct within one millisecond
        return f"poll-{int(time.time() * 1000)}-{next(self._seq)}"

    def create(self, text: str, kind: str, author: Optional[str]) -> str:
        if kind not in POLL_KINDS:
            kind = "answer"
        poll_id = self._next_id()
        while poll_id in self._polls:
            poll_id = self._next_id()
        self._polls[poll_id] = Poll(poll_id=poll_id, text=text, kind=kind, author=author)
        logger.info("Created %s poll %s by %s", kind, poll_id, author)
        self._evict()
        return poll_id

    def _evict(self) -> None:
        if not self.max_polls:
            return
        while len(self._polls) > self.max_polls:
            evicted_id, _ = self._polls.popitem(last=False)
            logger.debug("Evicted poll %s (store capped at %d)", evicted_id, self.max_polls)

    def vote(self, poll_id: str, voter: str, choice: str) -> Optional[VoteResult]:
        """Record one vote. Returns the new tally, or None when nothing changed."""
        poll = self._polls.get(poll_id)
        if poll is None:
            logger.debug("Vote for unknown poll %s dropped", poll_id)
            return None
        if choice not in VOTE_CHOICES:
            logger.debug("Vote with unsupported choice %r on poll %s dropped", choice, poll_id)
            return None
        if not voter or voter in poll.voters:
            logger.debug("Duplicate vote by %s on poll %s ignored", voter, poll_id)
            return None
        poll.votes[choice] += 1
        poll.voters.add(voter)
        return VoteResult(poll_id=poll_id, votes=dict(poll.votes), total_votes=poll.total_votes)

    def get(self, poll_id: str) -> Optional[Poll]:
        return self._polls.get(poll_id)

    def __contains__(self, poll_id: object) -> bool:
        return poll_id in self._polls

    def __len__(self) -> int:
        return len(self._polls)
