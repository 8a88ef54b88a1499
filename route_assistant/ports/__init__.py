"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and external
adapters. They enable dependency injection and make the system testable.

This module follows the Hexagonal Architecture pattern:
- Input ports: How the application is driven (services)
- Output ports: How the application drives external systems (adapters)
"""

from .history import TurnLogPort
from .nlp import EntityExtractorPort, IntentClassifierPort
from .rendering import DecisionRendererPort
from .routes import RouteLookupPort
from .sessions import SessionStorePort

__all__ = [
    # NLP
    "EntityExtractorPort",
    "IntentClassifierPort",
    # Collaborators
    "RouteLookupPort",
    "TurnLogPort",
    "SessionStorePort",
    # Rendering
    "DecisionRendererPort",
]
