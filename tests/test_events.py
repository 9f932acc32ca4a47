import pytest
from pydantic import ValidationError

from debatehub.debate.events import (
    CheckFact,
    Join,
    SendMessage,
    SendVoiceMessage,
    VotePoll,
    parse_action,
)


def test_join_accepts_bare_topic_string():
    action = parse_action("joinDebate", "tech1", "sid-1")
    assert isinstance(action, Join)
    assert action.topic == "tech1"
    assert action.sid == "sid-1"


def test_join_accepts_object_payload():
    assert parse_action("joinDebate", {"topic": " env1 "}, "sid-1").topic == "env1"


def test_send_message_maps_camel_case_flags():
    action = parse_action(
        "sendMessage",
        {"text": "Is X true?", "team": "pro", "username": "alice", "topic": "tech1", "isQuestion": True},
        "sid-1",
    )
    assert isinstance(action, SendMessage)
    assert action.is_question is True
    assert action.is_answer is False
    assert action.spawns_poll


def test_client_supplied_sid_is_overridden():
    action = parse_action("checkFact", {"text": "claim", "sid": "spoofed"}, "real")
    assert isinstance(action, CheckFact)
    assert action.sid == "real"


def test_vote_choice_is_normalised_but_not_rejected():
    action = parse_action("votePoll", {"pollId": "poll-1", "vote": " VALID ", "username": "b", "topic": "t"}, "s")
    assert isinstance(action, VotePoll)
    assert action.vote == "valid"
    assert parse_action("votePoll", {"pollId": "poll-1", "vote": "maybe", "username": "b", "topic": "t"}, "s").vote == "maybe"


@pytest.mark.parametrize(
    "event,data",
    [
        ("joinDebate", ""),
        ("joinDebate", None),
        ("sendMessage", {"text": "hi"}),
        ("sendMessage", {"text": "   ", "topic": "tech1"}),
        ("sendVoiceMessage", {"topic": "tech1"}),
        ("votePoll", {"pollId": "poll-1", "vote": "valid", "topic": "tech1"}),
        ("checkFact", {}),
        ("checkFact", ["not", "a", "dict"]),
    ],
)
def test_malformed_payloads_raise_validation_error(event, data):
    with pytest.raises(ValidationError):
        parse_action(event, data, "sid-1")


def test_unknown_event_raises_key_error():
    with pytest.raises(KeyError):
        parse_action("leaveDebate", {}, "sid-1")


def test_voice_message_alias():
    action = parse_action("sendVoiceMessage", {"audioUrl": "blob:abc", "topic": "tech1"}, "s")
    assert isinstance(action, SendVoiceMessage)
    assert action.audio_url == "blob:abc"
    assert action.team is None
