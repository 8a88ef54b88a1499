"""Wiring of the assistant's ports to their default adapters.

Every binding is a lazy, shared instance: the first ``resolve`` builds
it and later calls return the same object, so the orchestrator and the
UI see one session store and one catalog.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config
from .domain.errors import ConfigurationError


@dataclass
class Container:
    """Maps a port type to the factory of its single instance.

    Usage:
        container = create_default_container()
        orchestrator = container.resolve(DialogueOrchestrator)
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type, Callable[[], Any]] = field(default_factory=dict, repr=False)
    _instances: Dict[type, Any] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(self, port_type: type, factory: Callable[[], Any]) -> None:
        """Bind ``port_type`` to ``factory``, dropping any instance already built."""
        with self._lock:
            self._factories[port_type] = factory
            self._instances.pop(port_type, None)

    def resolve(self, port_type: type) -> Any:
        """Return the shared instance for ``port_type``.

        Raises:
            ConfigurationError: If nothing is bound to the type.
        """
        with self._lock:
            if port_type in self._instances:
                return self._instances[port_type]

            factory = self._factories.get(port_type)
            if factory is None:
                name = getattr(port_type, "__name__", str(port_type))
                raise ConfigurationError(f"Type not registered: {name}", setting_name=name)

            # Factories may resolve their own collaborators; the lock is reentrant.
            instance = factory()
            self._instances[port_type] = instance
            return instance

    def is_registered(self, port_type: type) -> bool:
        return port_type in self._factories


def create_default_container(config: Optional[AppConfig] = None) -> Container:
    """Build a container with the rule-based NLP, CSV catalog and in-memory state.

    Args:
        config: Optional configuration override; the cached config otherwise.
    """
    from .adapters.catalog import CSVRouteCatalog
    from .adapters.history import InMemoryTurnLog
    from .adapters.nlp import RuleBasedEntityExtractor, RuleBasedIntentClassifier
    from .adapters.rendering import MarkdownDecisionRenderer
    from .adapters.sessions import InMemorySessionStore
    from .ports.history import TurnLogPort
    from .ports.nlp import EntityExtractorPort, IntentClassifierPort
    from .ports.rendering import DecisionRendererPort
    from .ports.routes import RouteLookupPort
    from .ports.sessions import SessionStorePort
    from .services import DialogueOrchestrator, RouteScorer

    config = config or get_config()
    dialogue = config.dialogue
    container = Container(config=config)

    container.register(EntityExtractorPort, RuleBasedEntityExtractor)
    container.register(IntentClassifierPort, RuleBasedIntentClassifier)
    container.register(RouteLookupPort, lambda: CSVRouteCatalog(config.catalog))
    container.register(RouteScorer, RouteScorer)
    container.register(
        SessionStorePort,
        lambda: InMemorySessionStore(
            max_sessions=dialogue.max_sessions,
            ttl_seconds=dialogue.session_ttl_seconds,
            history_capacity=dialogue.history_capacity,
        ),
    )
    container.register(TurnLogPort, InMemoryTurnLog)
    container.register(
        DecisionRendererPort,
        lambda: MarkdownDecisionRenderer(
            available_cities=tuple(container.resolve(RouteLookupPort).list_cities())
        ),
    )
    container.register(
        DialogueOrchestrator,
        lambda: DialogueOrchestrator(
            entity_extractor=container.resolve(EntityExtractorPort),
            intent_classifier=container.resolve(IntentClassifierPort),
            route_lookup=container.resolve(RouteLookupPort),
            route_scorer=container.resolve(RouteScorer),
            session_store=container.resolve(SessionStorePort),
            turn_log=container.resolve(TurnLogPort),
        ),
    )
    return container


_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Return the process-wide container, building it on first use."""
    global _default_container
    with _container_lock:
        if _default_container is None:
            _default_container = create_default_container()
        return _default_container


def reset_container() -> None:
    """Forget the process-wide container so the next call rebuilds it."""
    global _default_container
    with _container_lock:
        _default_container = None
