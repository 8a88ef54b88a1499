"""Tests for the dependency injection container."""

import pytest

from route_assistant.adapters.catalog import CSVRouteCatalog
from route_assistant.adapters.sessions import InMemorySessionStore
from route_assistant.config import AppConfig, DialogueConfig
from route_assistant.container import (
    Container,
    create_default_container,
    get_container,
    reset_container,
)
from route_assistant.domain.errors import ConfigurationError
from route_assistant.domain.models import DecisionKind
from route_assistant.ports.rendering import DecisionRendererPort
from route_assistant.ports.routes import RouteLookupPort
from route_assistant.ports.sessions import SessionStorePort
from route_assistant.services import DialogueOrchestrator


class TestContainer:
    def test_register_and_resolve(self):
        container = Container()
        assert not container.is_registered(RouteLookupPort)
        container.register(RouteLookupPort, CSVRouteCatalog)
        assert isinstance(container.resolve(RouteLookupPort), CSVRouteCatalog)
        assert container.is_registered(RouteLookupPort)

    def test_instances_are_shared(self):
        container = Container()
        container.register(SessionStorePort, InMemorySessionStore)
        assert container.resolve(SessionStorePort) is container.resolve(SessionStorePort)

    def test_rebinding_replaces_the_instance(self):
        container = Container()
        container.register(SessionStorePort, InMemorySessionStore)
        first = container.resolve(SessionStorePort)
        container.register(SessionStorePort, lambda: InMemorySessionStore(max_sessions=2))
        second = container.resolve(SessionStorePort)
        assert second is not first
        assert second.max_sessions == 2

    def test_unregistered_type(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Container().resolve(RouteLookupPort)
        assert exc_info.value.setting_name == "RouteLookupPort"


class TestDefaultBindings:
    def test_orchestrator_is_wired(self):
        container = create_default_container()
        orchestrator = container.resolve(DialogueOrchestrator)
        assert orchestrator.session_store is container.resolve(SessionStorePort)
        assert orchestrator.route_lookup is container.resolve(RouteLookupPort)

        result = orchestrator.process_message("s1", "Hello!")
        assert result.decision.kind == DecisionKind.GREETING

    def test_store_follows_dialogue_config(self):
        config = AppConfig(dialogue=DialogueConfig(max_sessions=7, history_capacity=3))
        store = create_default_container(config).resolve(SessionStorePort)
        assert store.max_sessions == 7
        assert store.history_capacity == 3

    def test_renderer_lists_catalog_cities(self):
        renderer = create_default_container().resolve(DecisionRendererPort)
        assert "Mumbai" in renderer.available_cities
        assert list(renderer.available_cities) == sorted(renderer.available_cities)


def test_global_container_reset():
    first = get_container()
    assert get_container() is first
    reset_container()
    assert get_container() is not first
