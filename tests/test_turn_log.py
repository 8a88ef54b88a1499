import pytest

from route_assistant.adapters.history import InMemoryTurnLog, NullTurnLog
from route_assistant.domain.errors import TurnLogError


def test_append_and_load_in_order():
    log = InMemoryTurnLog()
    log.append_turn("s1", "user", "hello", {"intent": "greeting"})
    log.append_turn("s1", "assistant", "greeting")

    turns = log.load_history("s1")
    assert [(t.role, t.content) for t in turns] == [
        ("user", "hello"),
        ("assistant", "greeting"),
    ]
    assert turns[0].metadata == {"intent": "greeting"}
    assert turns[1].metadata == {}


def test_sessions_are_isolated():
    log = InMemoryTurnLog()
    log.append_turn("a", "user", "one")
    log.append_turn("b", "user", "two")
    assert [t.content for t in log.load_history("a")] == ["one"]
    assert log.load_history("missing") == []
    assert log.session_ids() == ["a", "b"]


def test_load_history_returns_a_copy():
    log = InMemoryTurnLog()
    log.append_turn("s1", "user", "hi")
    log.load_history("s1").clear()
    assert len(log.load_history("s1")) == 1


def test_invalid_role_rejected():
    log = InMemoryTurnLog()
    with pytest.raises(TurnLogError) as exc_info:
        log.append_turn("s1", "system", "nope")
    assert exc_info.value.session_id == "s1"
    assert log.load_history("s1") == []


def test_clear():
    log = InMemoryTurnLog()
    log.append_turn("a", "user", "1")
    log.append_turn("a", "assistant", "2")
    log.append_turn("b", "user", "3")

    assert log.clear("a") == 2
    assert log.clear("a") == 0
    assert log.clear() == 1
    assert log.session_ids() == []


def test_null_log_discards():
    log = NullTurnLog()
    log.append_turn("s1", "user", "hello")
    assert log.load_history("s1") == []
