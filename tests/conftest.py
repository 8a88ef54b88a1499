"""Shared fixtures for the route assistant test suite."""

from __future__ import annotations

from datetime import date, time
from typing import Callable
from unittest.mock import MagicMock

import pytest

from route_assistant.adapters.catalog import CSVRouteCatalog
from route_assistant.adapters.history import InMemoryTurnLog
from route_assistant.adapters.nlp import RuleBasedEntityExtractor, RuleBasedIntentClassifier
from route_assistant.adapters.sessions import InMemorySessionStore
from route_assistant.config import CatalogConfig, reset_config
from route_assistant.container import reset_container
from route_assistant.domain.models import (
    Intent,
    IntentResult,
    Route,
    Schedule,
    TravelMode,
)
from route_assistant.services import DialogueOrchestrator

# A Wednesday.
TODAY = date(2024, 1, 10)


@pytest.fixture(autouse=True)
def _reset_singletons():
    yield
    reset_config()
    reset_container()


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_route() -> Callable[..., Route]:
    """Factory for routes with sensible defaults."""

    def _make(
        route_id: str = "R1",
        price: float = 100.0,
        duration_minutes: int = 60,
        operator: str = "Indian Railways",
        departures: int = 1,
        mode: TravelMode = TravelMode.TRAIN,
        name: str = "",
    ) -> Route:
        schedules = tuple(
            Schedule(departure=time(6 + i, 0), arrival=time(8 + i, 0), platform=str(i + 1))
            for i in range(departures)
        )
        return Route(
            route_id=route_id,
            name=name or f"Route {route_id}",
            mode=mode,
            operator=operator,
            origin_station="Origin Central",
            destination_station="Destination Junction",
            price=price,
            duration_minutes=duration_minutes,
            distance_km=150.0,
            schedules=schedules,
        )

    return _make


@pytest.fixture
def catalog() -> CSVRouteCatalog:
    return CSVRouteCatalog(CatalogConfig())


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def turn_log() -> InMemoryTurnLog:
    return InMemoryTurnLog()


@pytest.fixture
def extractor() -> RuleBasedEntityExtractor:
    return RuleBasedEntityExtractor(clock=lambda: TODAY)


@pytest.fixture
def orchestrator(extractor, catalog, session_store, turn_log) -> DialogueOrchestrator:
    return DialogueOrchestrator(
        entity_extractor=extractor,
        intent_classifier=RuleBasedIntentClassifier(),
        route_lookup=catalog,
        session_store=session_store,
        turn_log=turn_log,
    )


@pytest.fixture
def scripted_classifier() -> MagicMock:
    """Classifier mock; set the next intent with ``scripted_classifier.next(...)``."""
    classifier = MagicMock()

    def _next(intent: Intent, confidence: float = 1.0) -> None:
        classifier.classify.return_value = IntentResult(intent=intent, confidence=confidence)

    classifier.next = _next
    _next(Intent.UNKNOWN, 0.0)
    return classifier


@pytest.fixture
def scripted_orchestrator(
    extractor, catalog, session_store, turn_log, scripted_classifier
) -> DialogueOrchestrator:
    """Orchestrator whose intent is chosen by the test, not the rule tables."""
    return DialogueOrchestrator(
        entity_extractor=extractor,
        intent_classifier=scripted_classifier,
        route_lookup=catalog,
        session_store=session_store,
        turn_log=turn_log,
    )
