import random

from debatehub.debate.polls import PollStore


def test_create_initialises_empty_tally():
    store = PollStore()
    poll_id = store.create("Is X true?", "question", "alice")

    poll = store.get(poll_id)
    assert poll_id.startswith("poll-")
    assert poll.votes == {"valid": 0, "invalid": 0}
    assert poll.voters == set()
    assert poll.kind == "question"
    assert poll.author == "alice"


def test_poll_ids_unique_within_same_millisecond(monkeypatch):
    monkeypatch.setattr("debatehub.debate.polls.time.time", lambda: 1700000000.0)
    store = PollStore()
    ids = {store.create(f"q{i}", "question", "a") for i in range(50)}
    assert len(ids) == 50


def test_vote_records_once_per_voter():
    store = PollStore()
    poll_id = store.create("claim", "answer", "bob")

    first = store.vote(poll_id, "carol", "valid")
    assert first is not None
    assert first.votes == {"valid": 1, "invalid": 0}
    assert first.total_votes == 1
    assert first.to_payload() == {"pollId": poll_id, "votes": {"valid": 1, "invalid": 0}, "totalVotes": 1}

    # Same name, other choice: still ignored
    assert store.vote(poll_id, "carol", "invalid") is None
    assert store.get(poll_id).votes == {"valid": 1, "invalid": 0}


def test_vote_on_unknown_poll_is_a_no_op():
    store = PollStore()
    poll_id = store.create("claim", "answer", "bob")
    assert store.vote("poll-does-not-exist", "carol", "valid") is None
    assert store.get(poll_id).votes == {"valid": 0, "invalid": 0}


def test_vote_with_unsupported_choice_does_not_touch_tally():
    store = PollStore()
    poll_id = store.create("claim", "answer", "bob")
    assert store.vote(poll_id, "carol", "maybe") is None
    poll = store.get(poll_id)
    assert poll.votes == {"valid": 0, "invalid": 0}
    assert "maybe" not in poll.votes
    # The voter can still cast a real vote afterwards
    assert store.vote(poll_id, "carol", "invalid").votes == {"valid": 0, "invalid": 1}


def test_tally_matches_voter_count_for_random_votes():
    rng = random.Random(42)
    store = PollStore()
    poll_ids = [store.create(f"q{i}", "question", "author") for i in range(5)]
    voters = [f"user{i}" for i in range(12)]

    for _ in range(400):
        store.vote(
            rng.choice(poll_ids + ["poll-unknown"]),
            rng.choice(voters),
            rng.choice(["valid", "invalid", "bogus"]),
        )
        for pid in poll_ids:
            poll = store.get(pid)
            assert poll.votes["valid"] + poll.votes["invalid"] == len(poll.voters)


def test_store_is_unbounded_by_default():
    # Polls are kept for the process lifetime unless a cap is configured
    store = PollStore()
    ids = [store.create(f"q{i}", "question", "a") for i in range(200)]
    assert len(store) == 200
    assert all(pid in store for pid in ids)


def test_capped_store_evicts_oldest_first():
    store = PollStore(max_polls=3)
    ids = [store.create(f"q{i}", "question", "a") for i in range(5)]

    assert len(store) == 3
    assert ids[0] not in store and ids[1] not in store
    assert all(pid in store for pid in ids[2:])
    # Votes on evicted polls behave like votes on unknown polls
    assert store.vote(ids[0], "carol", "valid") is None
