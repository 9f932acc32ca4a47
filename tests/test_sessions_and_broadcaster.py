from debatehub.debate.broadcaster import Broadcaster
from debatehub.debate.events import Outbound
from debatehub.debate.rooms import RoomDirectory
from debatehub.debate.sessions import SessionRegistry


class RecordingEmitter:
    def __init__(self, failing=()):
        self.failing = set(failing)
        self.sent = []

    def __call__(self, event, payload, to=None):
        if to in self.failing:
            raise ConnectionError(f"{to} went away")
        self.sent.append((to, event, payload))


def test_unregister_returns_joined_topics():
    registry = SessionRegistry()
    registry.register("a")
    registry.note_topic("a", "tech1")
    registry.note_topic("a", "env1")

    assert registry.unregister("a") == {"tech1", "env1"}
    assert "a" not in registry
    assert registry.unregister("a") == set()


def test_note_topic_registers_unknown_session():
    registry = SessionRegistry()
    registry.note_topic("late", "tech1")
    assert "late" in registry
    assert registry.get("late").topics == {"tech1"}


def test_note_name_keeps_last_display_name():
    registry = SessionRegistry()
    registry.register("a")
    registry.note_name("a", "Alice")
    registry.note_name("a", None)
    assert registry.get("a").display_name == "Alice"


def _room_with(*sids):
    rooms = RoomDirectory()
    for sid in sids:
        rooms.join("tech1", sid)
    return rooms


def test_to_room_includes_everyone_by_default():
    emitter = RecordingEmitter()
    broadcaster = Broadcaster(_room_with("a", "b", "c"), emitter)

    delivered = broadcaster.to_room("tech1", "receiveMessage", {"text": "hi"})

    assert delivered == ["a", "b", "c"]
    assert [to for to, _, _ in emitter.sent] == ["a", "b", "c"]


def test_to_room_can_exclude_originator():
    emitter = RecordingEmitter()
    broadcaster = Broadcaster(_room_with("a", "b"), emitter)

    broadcaster.to_room("tech1", "receiveVoiceMessage", {}, exclude_sid="a")

    assert [to for to, _, _ in emitter.sent] == ["b"]


def test_failed_delivery_does_not_stop_fan_out():
    emitter = RecordingEmitter(failing={"b"})
    broadcaster = Broadcaster(_room_with("a", "b", "c"), emitter)

    delivered = broadcaster.to_room("tech1", "pollUpdate", {"pollId": "p"})

    assert delivered == ["a", "c"]
    assert [to for to, _, _ in emitter.sent] == ["a", "c"]


def test_to_room_for_unknown_topic_sends_nothing():
    emitter = RecordingEmitter()
    broadcaster = Broadcaster(RoomDirectory(), emitter)
    assert broadcaster.to_room("ghost", "receiveMessage", {}) == []
    assert emitter.sent == []


def test_deliver_routes_private_and_room_events():
    emitter = RecordingEmitter()
    broadcaster = Broadcaster(_room_with("a", "b"), emitter)

    broadcaster.deliver(
        [
            Outbound("factCheckResult", {"result": "ok"}, to="a"),
            Outbound("receiveVoiceMessage", {"audioUrl": "x"}, topic="tech1", exclude="b"),
        ]
    )

    assert emitter.sent == [
        ("a", "factCheckResult", {"result": "ok"}),
        ("a", "receiveVoiceMessage", {"audioUrl": "x"}),
    ]
