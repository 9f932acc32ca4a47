"""Debate rooms: session registry, room directory, poll store, broadcaster and
the coordinator that drives them from Socket.IO events.

Socket.IO handlers live in ``gateway``; importing it registers them.
"""

from .broadcaster import Broadcaster
from .coordinator import Coordinator, DebateState
from .polls import PollStore


def init_debate(app, socketio, fact_checker=None) -> Coordinator:
    """Build the shared debate state for ``app`` and attach it to ``app.extensions``."""
    state = DebateState(polls=PollStore(max_polls=app.config.get("POLL_STORE_MAX_POLLS", 0)))
    coordinator = Coordinator(
        state,
        fact_checker,
        voice_exclude_sender=bool(app.config.get("VOICE_EXCLUDE_SENDER", True)),
    )
    app.extensions["debate"] = coordinator
    app.extensions["debate_broadcaster"] = Broadcaster(state.rooms, socketio.emit)
    return coordinator
