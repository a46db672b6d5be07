"""Konuşma çıkarma."""

from engine.messages import conversation, last_message
from models.shop import Message


def _msg(mid, sender, recipient, ts):
    return Message(id=mid, sender_id=sender, recipient_id=recipient, text=mid, timestamp=ts)


MESSAGES = [
    _msg("m3", "a", "b", 300),
    _msg("m1", "a", "b", 100),
    _msg("m2", "b", "a", 200),
    _msg("x", "a", "c", 150),
    _msg("y", "c", "b", 250),
]


def test_conversation_is_two_way_and_sorted():
    thread = conversation(MESSAGES, "a", "b")
    assert [m.id for m in thread] == ["m1", "m2", "m3"]
    assert conversation(MESSAGES, "b", "a") == thread


def test_conversation_excludes_other_threads():
    assert [m.id for m in conversation(MESSAGES, "a", "c")] == ["x"]
    assert conversation(MESSAGES, "a", "nobody") == []


def test_last_message():
    assert last_message(MESSAGES, "a", "b").id == "m3"
    assert last_message(MESSAGES, "b", "nobody") is None
