"""Tests for domain model behaviour."""

from datetime import date, time

from route_assistant.domain.models import (
    DecisionKind,
    Entities,
    Intent,
    ProcessResult,
    ResponseDecision,
    Schedule,
    Session,
    TravelMode,
    Turn,
)


class TestEntities:
    def test_merge_overlays_present_slots_only(self):
        prior = Entities(origin="Mumbai", destination="Pune", mode=TravelMode.BUS)
        merged = prior.merged_with(Entities(destination="Goa"))
        assert merged == Entities(origin="Mumbai", destination="Goa", mode=TravelMode.BUS)

    def test_missing_slots_in_check_order(self):
        assert Entities().missing_slots() == ["origin", "destination"]
        assert Entities(destination="Pune").missing_slots() == ["origin"]
        assert Entities(origin="Mumbai", destination="Pune").missing_slots() == []

    def test_location_flags(self):
        assert Entities(origin="Mumbai").has_location
        assert not Entities(origin="Mumbai").has_route_endpoints
        assert not Entities(mode=TravelMode.TRAIN).has_location

    def test_to_dict_skips_empty_slots(self):
        entities = Entities(origin="Mumbai", mode=TravelMode.TRAIN, date=date(2024, 1, 11))
        assert entities.to_dict() == {"origin": "Mumbai", "mode": "train", "date": "2024-01-11"}
        assert Entities().is_empty


class TestSession:
    def test_history_is_a_bounded_fifo(self):
        session = Session.create("s1", history_capacity=2)
        for content in ("a", "b", "c"):
            session.add_turn(Turn(role="user", content=content))
        assert [t.content for t in session.history] == ["b", "c"]

    def test_copy_is_independent(self):
        session = Session.create("s1", history_capacity=5)
        working = session.copy()
        working.add_turn(Turn(role="user", content="hi"))
        working.turn_count = 1

        assert len(session.history) == 0
        assert session.turn_count == 0
        assert working.history.maxlen == 5


def test_schedule_runs_on_weekdays():
    weekdays = Schedule(departure=time(6, 0), arrival=time(9, 0), days=(1, 2, 3, 4, 5, 6))
    assert weekdays.runs_on(date(2024, 1, 15))
    assert not weekdays.runs_on(date(2024, 1, 14))


def test_process_result_metadata():
    result = ProcessResult(
        session_id="s1",
        decision=ResponseDecision(kind=DecisionKind.GREETING),
        intent=Intent.GREETING,
        confidence=1 / 3,
        entities=Entities(),
    )
    assert result.metadata == {"intent": "greeting", "confidence": 1 / 3, "entities": {}}
