# Socket.IO handlers for debate rooms.
# Each handler validates its payload, hands the action to the Coordinator and
# delivers whatever events come back through the Broadcaster.
from __future__ import annotations

from typing import Any

from flask import current_app, has_request_context, request
from pydantic import ValidationError

from debatehub.extensions import socketio

from .broadcaster import Broadcaster
from .coordinator import Coordinator
from .events import DEBATE_ERROR, Disconnect, parse_action


def _coordinator() -> Coordinator:
    return current_app.extensions["debate"]


def _broadcaster() -> Broadcaster:
    return current_app.extensions["debate_broadcaster"]


def _current_sid() -> str | None:
    sid = getattr(request, "sid", None) if has_request_context() else None
    return sid if isinstance(sid, str) else None


def _reply_error(sid: str, event: str, message: str) -> None:
    _broadcaster().to_session(sid, DEBATE_ERROR, {"event": event, "message": message})


def _handle(event: str, data: Any) -> None:
    sid = _current_sid()
    if sid is None:
        current_app.logger.warning("%s with invalid SID", event)
        return
    try:
        action = parse_action(event, data, sid)
    except ValidationError as e:
        current_app.logger.warning(f"{event} malformed payload from {sid}: {e.errors(include_url=False)}")
        _reply_error(sid, event, "Invalid payload.")
        return
    try:
        outbound = _coordinator().dispatch(action)
    except Exception as e:  # noqa
        current_app.logger.error(f"Error processing {event} from {sid}: {e}", exc_info=True)
        _reply_error(sid, event, "Internal error.")
        return
    _broadcaster().deliver(outbound)


@socketio.on("connect")
def _on_connect(auth=None):  # type: ignore
    sid = _current_sid()
    if sid is None:
        return
    _coordinator().connect(sid)
    current_app.logger.info("A user connected: %s", sid)


@socketio.on("disconnect")
def _on_disconnect(reason=None):  # type: ignore
    sid = _current_sid()
    if sid is None:
        current_app.logger.warning("Disconnect with invalid SID")
        return
    try:
        _coordinator().dispatch(Disconnect(sid=sid))
    except Exception as e:  # noqa
        current_app.logger.error(f"Error cleaning up session {sid}: {e}", exc_info=True)
        return
    current_app.logger.info("User disconnected: %s", sid)


@socketio.on("joinDebate")
def _on_join_debate(data):  # type: ignore
    _handle("joinDebate", data)


@socketio.on("sendMessage")
def _on_send_message(data):  # type: ignore
    _handle("sendMessage", data)


@socketio.on("sendVoiceMessage")
def _on_send_voice_message(data):  # type: ignore
    _handle("sendVoiceMessage", data)


@socketio.on("votePoll")
def _on_vote_poll(data):  # type: ignore
    _handle("votePoll", data)


@socketio.on("checkFact")
def _on_check_fact(data):  # type: ignore
    _handle("checkFact", data)
